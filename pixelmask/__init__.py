"""
pixelmask: reversible XOR / bit-rotation pixel obfuscation with mask-log verification.
"""

__version__ = "1.0.0"
