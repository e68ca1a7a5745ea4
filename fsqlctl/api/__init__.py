"""
FSQL API Access.

Token classification, command routing, request dispatch and response
decoding. No terminal I/O happens here.
"""
