"""
Forecast Kernel

Shared foundation for the labor forecast engines:
- Immutable domain value objects (Decimal-only numerics)
- Typed exceptions with machine-readable codes
- Structured JSON logging with context propagation
- Injectable clock
"""

__version__ = "0.1.0"
