"""Monetary domain package.

This package contains the currency registry, currency units and the money types
(`BigMoney` with free scale, `FixedMoney` and `Money` with fixed scale), all built
on exact integer arithmetic with explicit rounding.
"""
