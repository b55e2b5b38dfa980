"""Register map model, raw image encoder and decoder, I2C access and report for the THS8200 video DAC."""

__version__ = "0.1.0"
__all__ = ["registers", "codec", "report", "cli"]