"""Fixed-point audio blocks for a bytebeat groovebox: drum voices, an AR envelope, effects chain and output encoders."""

__version__ = "1.16.0"