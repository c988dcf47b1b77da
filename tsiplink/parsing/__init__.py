"""
This package contains all modules related to parsing the TSIP byte stream
received from the GPS timing receiver.

Sub-packages handle specific stages:

- ``framing``: Byte-stuffed packet framing and wire encoding.
- ``reports``: Report codes, typed report records and the packet decoder.
"""
