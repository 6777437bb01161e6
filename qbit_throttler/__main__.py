"""
Allow running the throttler with ``python -m qbit_throttler``.
"""
from qbit_throttler.main import run

if __name__ == "__main__":
    raise SystemExit(run())
