# src/tickloop/handlers/greeting.py

from __future__ import annotations


def greet(payload: str) -> str:
    return f"Hello! {payload}"
