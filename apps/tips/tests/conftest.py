import pytest

from apps.tips.gateway import GatewayError, MidtransClient


class FakeMidtransClient:
    """Records Snap calls and replays canned status responses."""

    def __init__(self, status_response=None, fail=False):
        self.snap_calls = []
        self.status_calls = []
        self.status_response = status_response or {'transaction_status': 'pending'}
        self.fail = fail

    def create_snap_transaction(self, *, order_id, gross_amount, item_details, callbacks):
        self.snap_calls.append({
            'order_id': order_id,
            'gross_amount': gross_amount,
            'item_details': item_details,
            'callbacks': callbacks,
        })
        if self.fail:
            raise GatewayError('Midtrans returned HTTP 500')
        return {
            'token': f'snap-{order_id}',
            'redirect_url': f'https://app.sandbox.midtrans.com/snap/v4/redirection/{order_id}',
        }

    def get_transaction_status(self, order_id):
        self.status_calls.append(order_id)
        if self.fail:
            raise GatewayError('Midtrans request failed: timeout')
        return dict(self.status_response, order_id=order_id)


@pytest.fixture
def fake_gateway():
    return FakeMidtransClient()


@pytest.fixture
def failing_gateway():
    return FakeMidtransClient(fail=True)


@pytest.fixture
def signed_notification(venue):
    """Factory: Midtrans notification body signed with the venue's server key."""
    def _signed(order_id, transaction_status, gross_amount='50000.00', status_code='200', **extra):
        payload = {
            'order_id': order_id,
            'status_code': status_code,
            'gross_amount': gross_amount,
            'transaction_status': transaction_status,
            'payment_type': 'qris',
            **extra,
        }
        payload['signature_key'] = MidtransClient.compute_signature(
            order_id, status_code, gross_amount, venue.midtrans_server_key
        )
        return payload
    return _signed
