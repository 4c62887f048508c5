"""Tests for CallerIdentity.from_claims."""

from cityinfo.core.identity import CallerIdentity


def test_from_claims_reads_city_and_names():
    caller = CallerIdentity.from_claims({
        "sub": 1, "city": "Antwerp", "given_name": "Kevin", "family_name": "Dockx",
    })
    assert caller == CallerIdentity(
        subject="1", city="Antwerp", given_name="Kevin", family_name="Dockx",
    )


def test_missing_city_claim_is_none():
    assert CallerIdentity.from_claims({"sub": "2"}).city is None
