def mask_account_number(value: str) -> str:
    """Show only the last four digits of a bank account number."""
    if not value:
        return ""
    return "*" * max(len(value) - 4, 0) + value[-4:]
