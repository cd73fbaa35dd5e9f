import pytest

from ordhash.lang import hash as lhash


@pytest.fixture(params=[3, 4, 5])
def pickle_protocol(request) -> int:
    return request.param


@pytest.fixture
def state_hash() -> lhash.Hash[str, str]:
    return lhash.hash_map(
        "Connecticut", "CT", "Delaware", "DE", "New Jersey", "NJ", "Virginia", "VA"
    )


@pytest.fixture
def contacts() -> lhash.Hash:
    return lhash.Hash(
        {
            "john": lhash.h(phone="555-1234", email="john@example.com"),
            "eric": {"phone": "555-1235", "email": "eric@example.com"},
        }
    )
