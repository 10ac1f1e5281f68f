"""
demoqa UI automation test suites.

Kept importable so that:
  - page objects and tests import the framework as `testsuites.ui_testing...`
  - unit tests share `testsuites.unit.fakes`
  - `run_tests.py` can be pointed at any sub-suite
"""
