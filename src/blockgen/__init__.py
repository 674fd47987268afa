"""
Block Type Generator (blockgen)

Derives typed Python code from a declarative block schema:
    - A closed type for every property's value domain
    - A packed mixed-radix integer encoding of every property combination
    - Conversion between typed blocks and string-keyed string maps

ARCHITECTURAL GUARANTEE:
------------------------
Inference, encoding and model building contain ZERO knowledge of the
target language's syntax. Naming knows its identifier rules only.

All syntax lives in the backends.
All backends consume the structural model unchanged.
"""

__version__ = "0.1.0"
