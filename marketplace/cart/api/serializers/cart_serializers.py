from rest_framework import serializers


class CartLineSerializer(serializers.Serializer):
    listingId = serializers.UUIDField()
    productId = serializers.UUIDField()
    vendorId = serializers.UUIDField()
    productName = serializers.CharField()
    storeName = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    quantity = serializers.IntegerField()
    image = serializers.CharField(allow_null=True)


class CartResponseSerializer(serializers.Serializer):
    items = CartLineSerializer(many=True)
    total = serializers.DecimalField(max_digits=12, decimal_places=2)
    itemCount = serializers.IntegerField()


class CartAddRequestSerializer(serializers.Serializer):
    listingId = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, default=1)


class CartUpdateRequestSerializer(serializers.Serializer):
    """A quantity of zero or less removes the line."""

    listingId = serializers.UUIDField()
    quantity = serializers.IntegerField()


class CartRemoveRequestSerializer(serializers.Serializer):
    listingId = serializers.UUIDField()
