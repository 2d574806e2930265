from rest_framework import serializers

from .payment_serializers import PaymentSerializer, VendorPayoutSerializer


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()
    detail = serializers.CharField()


class OrderPaymentResponseSerializer(serializers.Serializer):
    orderId = serializers.UUIDField()
    orderStatus = serializers.CharField()
    payment = PaymentSerializer()


class PaymentAccountResponseSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    accountHolderName = serializers.CharField()
    accountNumber = serializers.CharField(help_text="Masked except the last 4 digits")
    ifscCode = serializers.CharField()
    bankName = serializers.CharField()
    branchName = serializers.CharField()
    upiId = serializers.CharField()
    panNumber = serializers.CharField()
    gstNumber = serializers.CharField()
    commissionRate = serializers.DecimalField(max_digits=5, decimal_places=2)
    verificationStatus = serializers.CharField()
    verificationNotes = serializers.CharField()
    updatedAt = serializers.DateTimeField()


class EarningsSummarySerializer(serializers.Serializer):
    totalGross = serializers.DecimalField(max_digits=12, decimal_places=2)
    totalCommission = serializers.DecimalField(max_digits=12, decimal_places=2)
    totalNet = serializers.DecimalField(max_digits=12, decimal_places=2)
    pendingAmount = serializers.DecimalField(max_digits=12, decimal_places=2)
    processedAmount = serializers.DecimalField(max_digits=12, decimal_places=2)
    payoutCount = serializers.IntegerField()
    commissionRate = serializers.DecimalField(max_digits=5, decimal_places=2)


class VendorEarningsResponseSerializer(serializers.Serializer):
    summary = EarningsSummarySerializer()
    payouts = VendorPayoutSerializer(many=True)
