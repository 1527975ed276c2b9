"""Shared fixtures for the recommender test suite."""

import pytest

from recommender.lookups import load_lookup_tables


@pytest.fixture
def tables():
    return load_lookup_tables()


@pytest.fixture
def make_product():
    def _make(**overrides):
        product = {
            "id": 1,
            "title": "Generic Product",
            "description": "",
            "brand": "",
            "category": "smartphones",
            "price": 100,
            "rating": None,
            "stock": None,
        }
        product.update(overrides)
        return product

    return _make
