from .cart_serializers import (
    CartAddRequestSerializer,
    CartLineSerializer,
    CartRemoveRequestSerializer,
    CartResponseSerializer,
    CartUpdateRequestSerializer,
)
