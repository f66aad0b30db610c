"""
SmartBin rewards backend.
Credits wallet balance and eco points for recycled waste and handles redemptions.
"""

__version__ = "1.0.0"
