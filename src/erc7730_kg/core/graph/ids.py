# erc7730_kg/core/graph/ids.py
"""
Entity ids and the well-known ids of the GRC-20 system space.
"""
from __future__ import annotations

import uuid

from erc7730_kg.contracts.graph import DataType

# System properties
NAME_PROPERTY = "LuBWqZAu6pz54eiJS5mLv8"
DESCRIPTION_PROPERTY = "LA1DqP5v6QAdsgLPXGF3YA"
TYPES_PROPERTY = "Jfmby78N4BCseZinBmdVov"
PROPERTIES = "9zBADaYzyfzyFJn4GU1cC"
VALUE_TYPE_PROPERTY = "WQfdWjboZWFuTseDhG5Cw1"

# System types
PROPERTY = "GscJ2GELQjmLoaVrYyR3xm"
SCHEMA_TYPE = "VdTsW1mGiy1XSooJaBBLc4"

VALUE_TYPES: dict[DataType, str] = {
    DataType.TEXT: "LckSTmjBrYAJaFcDs89am5",
    DataType.NUMBER: "LBdMpTNyycNffsF51t2eSp",
    DataType.CHECKBOX: "G9NpD4c7GB7nH5YU9Tesgf",
    DataType.URL: "5xroh3gbWYbWY4oR3nFXzy",
    DataType.TIME: "3mswMrL91GuYTfBq29EuNE",
    DataType.POINT: "UZBZNbA7Uhx1f8ebLi1Qj5",
    DataType.RELATION: "AKDxovGvZaPSWnmKnSoZJY",
}


def generate_id() -> str:
    return uuid.uuid4().hex
