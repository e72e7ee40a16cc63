"""
Gold Calculator Package

Line-item pricing for gold purchases: weight × quantity × price per gram,
plus per-gram tax and flat provider fees, totalled across all items.
"""

__version__ = "1.0.0"
