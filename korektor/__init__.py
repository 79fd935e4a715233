"""Border crossing report corrector"""

__version__ = "1.0.0"
