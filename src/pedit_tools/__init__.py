"""Developer tooling for the pedit C++ codebase.

``key_show`` prints the codes a terminal sends for each key press, and
``runtests`` generates the C++ test harness from ``tests/test.cpp`` before
handing off to ``make``.
"""

__all__: list[str] = ["key_show", "runtests"]
