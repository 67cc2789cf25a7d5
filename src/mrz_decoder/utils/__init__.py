"""
MRZ decoding utilities: checksum engine, field extraction, format detection,
layout factory and validation.
"""
