from rest_framework import serializers


class PaymentAccountSetupRequestSerializer(serializers.Serializer):
    account_holder_name = serializers.CharField(max_length=200)
    account_number = serializers.RegexField(
        r"^\d{9,18}$", error_messages={"invalid": "Account number must be 9 to 18 digits."}
    )
    ifsc_code = serializers.RegexField(
        r"^[A-Z]{4}0[A-Z0-9]{6}$", error_messages={"invalid": "Enter a valid IFSC code."}
    )
    bank_name = serializers.CharField(max_length=200)
    branch_name = serializers.CharField(max_length=200, required=False, allow_blank=True)
    upi_id = serializers.RegexField(
        r"^[\w.\-]{2,}@[a-zA-Z]{2,}$", required=False, allow_blank=True, error_messages={"invalid": "Invalid UPI id."}
    )
    pan_number = serializers.RegexField(
        r"^[A-Z]{5}[0-9]{4}[A-Z]$", required=False, allow_blank=True, error_messages={"invalid": "Invalid PAN."}
    )
    gst_number = serializers.RegexField(
        r"^[0-9]{2}[A-Z0-9]{13}$", required=False, allow_blank=True, error_messages={"invalid": "Invalid GSTIN."}
    )

    def to_internal_value(self, data):
        data = {key: data[key] for key in data}
        for field in ("ifsc_code", "pan_number", "gst_number"):
            if isinstance(data.get(field), str):
                data[field] = data[field].strip().upper()
        return super().to_internal_value(data)


class PayoutStatusRequestSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=["processed", "failed"])


class AccountVerificationRequestSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=["verified", "rejected"])
    notes = serializers.CharField(max_length=1000, required=False, allow_blank=True)
