# Utils package for Vendora backend
