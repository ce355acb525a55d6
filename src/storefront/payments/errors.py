from protean.exceptions import ValidationError


class DuplicatePaymentError(ValidationError):
    """The same order and payment token were submitted again within the guard window."""

    def __init__(self, order_id):
        self.order_id = order_id
        super().__init__({"payment_token": ["Duplicate payment attempt detected"]})
