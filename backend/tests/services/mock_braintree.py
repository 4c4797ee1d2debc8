"""Mock Braintree SDK — stands in for braintree.BraintreeGateway in checkout tests.

Invariants:
    - Exposes the two SDK surfaces the shop uses: client_token.generate()
      and transaction.sale(request)
    - Every sale request is recorded so tests can assert the charged amount
    - Results mimic SuccessfulResult / ErrorResult attribute shapes

Design Decisions:
    - Flat mock classes (no inheritance): simple, explicit, easy to debug
    - Builders return result objects; the test decides which one sale() returns
"""

from types import SimpleNamespace


def success_result(transaction_id: str = "txn_123", amount: str = "0.00"):
    return SimpleNamespace(
        is_success=True,
        transaction=SimpleNamespace(
            id=transaction_id, status="submitted_for_settlement", amount=amount,
        ),
    )


def declined_result(message: str = "Do Not Honor", transaction_id: str | None = "txn_declined"):
    transaction = None
    if transaction_id:
        transaction = SimpleNamespace(
            id=transaction_id, status="processor_declined", amount=None,
        )
    return SimpleNamespace(
        is_success=False,
        message=message,
        transaction=transaction,
        errors=SimpleNamespace(deep_errors=[]),
    )


def validation_error_result(messages: list[str]):
    return SimpleNamespace(
        is_success=False,
        message=messages[0] if messages else "",
        transaction=None,
        errors=SimpleNamespace(
            deep_errors=[SimpleNamespace(message=m) for m in messages],
        ),
    )


class _ClientTokenApi:
    def __init__(self, sdk):
        self._sdk = sdk

    def generate(self, params=None):
        if self._sdk.raise_error:
            raise self._sdk.raise_error
        return self._sdk.client_token_value


class _TransactionApi:
    def __init__(self, sdk):
        self._sdk = sdk

    def sale(self, request):
        self._sdk.sales.append(request)
        if self._sdk.raise_error:
            raise self._sdk.raise_error
        if self._sdk.next_result is not None:
            return self._sdk.next_result
        return success_result(amount=request["amount"])


class FakeBraintreeSdk:
    """Controllable replacement for braintree.BraintreeGateway."""

    def __init__(self):
        self.sales: list[dict] = []
        self.next_result = None
        self.raise_error: Exception | None = None
        self.client_token_value = "fake-client-token"
        self.client_token = _ClientTokenApi(self)
        self.transaction = _TransactionApi(self)
