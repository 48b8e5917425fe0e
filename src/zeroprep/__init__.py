"""zeroprep: snapshot a macOS setup into a zero.sh configuration bundle."""

__version__ = "0.1.0"
