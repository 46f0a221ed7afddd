"""
Python library for arithmetic in the groups G1 and G2 of pairing-friendly
Barreto-Naehrig elliptic curves.

This module gives users direct access to the individual modules: field
elements, curve parameters, and the two groups with their associated
classes and methods.
"""
from bngroups import fields
from bngroups import parameters
from bngroups import groups
from bngroups.parameters import init_public_parameters
from bngroups.groups import point, point2, DeserializationError
