import pytest

from apps.payouts.services import allocate_tip


@pytest.fixture
def paid_tip(make_tip):
    """Factory: PAID tip that has already been allocated to staff."""
    def _paid_tip(**kwargs):
        tip = make_tip(**kwargs)
        allocate_tip(tip=tip)
        return tip
    return _paid_tip
