"""
This __init__.py file is kept in the root tests directory while other __init__.py files
in the test structure are left out.

Reasons for keeping this file:
1. It lets tests import shared builders as `tests.helpers...`
2. It keeps import behavior consistent across environments

Test subdirectories work as namespace packages (PEP 420), so test module names must be
unique across the whole tree.
"""
