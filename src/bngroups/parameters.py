"""
.. module:: parameters

parameters module
=================

This module exports the class :obj:`~bngroups.parameters.parameters`,
an immutable bundle of the constants that define the groups G1 and G2 of
a Barreto-Naehrig (BN) curve, along with the functions that install one
such bundle as the process-wide default.

Two presets are available: ``'bn254'`` (the curve supported by the
`bn254 <https://pypi.org/project/bn254>`__ package, from which its order
and generators are obtained) and ``'alt_bn128'`` (the curve used by
libsnark and Ethereum).

>>> params = parameters.from_curve('bn254')
>>> params.p % 4, params.p % 6
(3, 1)
>>> parameters.from_curve('bn254') is params
True

Every point constructor in :obj:`~bngroups.groups` accepts an explicit
instance. When none is supplied, the instance installed via
:obj:`init_public_parameters` is used.

>>> init_public_parameters('bn254') is public_parameters()
True
"""
from __future__ import annotations
from typing import Any, Tuple, Union
import doctest
import functools
import logging
import threading
from bn254 import curve as bn254_curve
from bn254.ecp import generator as get_base
from bn254.ecp2 import generator as get_base2

from bngroups.fields import fp, fp2

logger = logging.getLogger(__name__)

class UninitializedParameters(RuntimeError):
    """
    Raised when the process-wide parameters are required but
    :obj:`init_public_parameters` has not been invoked.
    """

class ParametersAlreadyInitialized(RuntimeError):
    """
    Raised when :obj:`init_public_parameters` is invoked with parameters
    that differ from those already installed.
    """

class parameters:
    """
    Immutable collection of the constants for the groups G1 (over *F_p*)
    and G2 (over *F_p^2*, on the sextic twist) of a BN curve.

    The twist coefficient ``b2`` and the generator ``g2`` must lie in the
    representation of *F_p^2* used by :obj:`~bngroups.fields.fp2`. The
    Frobenius constants used by :obj:`~bngroups.groups.point2.mul_by_q` are
    derived here from ``b`` and ``b2``, so that the same formula applies to
    both D-type and M-type twists.

    >>> params = parameters.from_curve('alt_bn128')
    >>> params.g1
    (fp(1), fp(2))
    >>> params.b2 == fp2(3, 0, params.p) / fp2(9, 1, params.p)
    True
    >>> params.p = 7
    Traceback (most recent call last):
      ...
    AttributeError: parameters are immutable
    """
    # pylint: disable=too-many-instance-attributes,too-many-arguments
    __slots__ = (
        'name', 'p', 'r', 'b', 'b2', 'g1', 'g2',
        'frobenius_x', 'frobenius_y'
    )

    def __init__(
            self: parameters,
            name: str,
            p: int,
            r: int,
            b: int,
            b2: Tuple[int, int],
            g1: Tuple[int, int],
            g2: Tuple[Tuple[int, int], Tuple[int, int]]
        ):
        if p % 4 != 3:
            raise ValueError('field modulus must be congruent to 3 modulo 4')
        if p % 6 != 1:
            raise ValueError('field modulus must be congruent to 1 modulo 6')
        if r < 2:
            raise ValueError('group order must be at least 2')

        b_ = fp(b, p)
        b2_ = fp2(*b2, p)
        if b2_.is_zero():
            raise ValueError('twist coefficient must be non-zero')

        g1_ = (fp(g1[0], p), fp(g1[1], p))
        if g1_[1] * g1_[1] != g1_[0] * g1_[0] * g1_[0] + b_:
            raise ValueError('G1 generator is not on the curve')

        g2_ = (fp2(*g2[0], p), fp2(*g2[1], p))
        if g2_[1] * g2_[1] != g2_[0] * g2_[0] * g2_[0] + b2_:
            raise ValueError('G2 generator is not on the twisted curve')
        if _multiple(r, g1_) is not None or _multiple(r, g2_) is not None:
            raise ValueError('group order does not annihilate the generators')

        # Frobenius twist constants ``c^((p-1)/3)`` and ``c^((p-1)/2)``.
        c = fp2(b, 0, p) / b2_

        for (attribute, value) in (
            ('name', name), ('p', p), ('r', r), ('b', b_), ('b2', b2_),
            ('g1', g1_), ('g2', g2_),
            ('frobenius_x', c ** ((p - 1) // 3)),
            ('frobenius_y', c ** ((p - 1) // 2))
        ):
            object.__setattr__(self, attribute, value)

        logger.debug('constructed group parameters for curve %s', name)

    @staticmethod
    def from_curve(name: str) -> parameters:
        """
        Return the parameters for a named curve. Each preset is built once
        and the same instance is returned by every later call.

        >>> parameters.from_curve('alt_bn128').r
        21888242871839275222246405745257275088548364400416034343698204186575808495617
        >>> parameters.from_curve('secp256k1')
        Traceback (most recent call last):
          ...
        ValueError: unknown curve: secp256k1
        """
        if name not in _PRESETS:
            raise ValueError('unknown curve: ' + str(name))
        return _preset(name)

    def __setattr__(self: parameters, name: str, value: Any):
        raise AttributeError('parameters are immutable')

    def __delattr__(self: parameters, name: str):
        raise AttributeError('parameters are immutable')

    def _key(self: parameters) -> tuple:
        return (self.p, self.r, self.b, self.b2, self.g1, self.g2)

    def __eq__(self: parameters, other: Any) -> bool:
        if isinstance(other, parameters):
            return self is other or self._key() == other._key()
        return NotImplemented

    def __hash__(self: parameters) -> int:
        return hash(self._key())

    def __repr__(self: parameters) -> str:
        return 'parameters(' + repr(self.name) + ')'

def _add(a, b):
    """
    Sum of two affine points on a curve with *a* = 0, where ``None`` is
    the identity.
    """
    if a is None:
        return b
    if b is None:
        return a

    ((x1, y1), (x2, y2)) = (a, b)
    if x1 == x2:
        if y1 != y2 or y1.is_zero():
            return None
        slope = (x1 * x1 * 3) / (y1 * 2)
    else:
        slope = (y2 - y1) / (x2 - x1)

    x3 = slope * slope - x1 - x2
    return (x3, slope * (x1 - x3) - y1)

def _multiple(k: int, a):
    result = None
    for bit in bin(k)[2:]:
        result = _add(result, result)
        if bit == '1':
            result = _add(result, a)
    return result

def _bn254() -> parameters:
    # BN curve with ``u = -(2**62 + 2**55 + 1)`` and ``b = 2``.
    # pylint: disable=unnecessary-direct-lambda-call
    p = (
        (lambda x: x * (x * (x * ((36 * x) - 36) + 24) - 6) + 1)
        ((2 ** 62) + (2 ** 55) + 1)
    )
    (x, y) = get_base().get()
    (x2, y2) = get_base2().get()
    (x2, y2) = (x2.get(), y2.get())

    # The twist coefficient is recovered from the generator of G2.
    (x2_, y2_) = (fp2(*x2, p), fp2(*y2, p))
    b2 = y2_ * y2_ - x2_ * x2_ * x2_

    return parameters(
        'bn254', p, bn254_curve.r, 2, (b2.c0, b2.c1), (x, y), (x2, y2)
    )

def _alt_bn128() -> parameters:
    p = 21888242871839275222246405745257275088696311157297823662689037894645226208583
    b2 = fp2(3, 0, p) / fp2(9, 1, p)
    return parameters(
        'alt_bn128',
        p,
        21888242871839275222246405745257275088548364400416034343698204186575808495617,
        3,
        (b2.c0, b2.c1),
        (1, 2),
        (
            (
                10857046999023057135944570762232829481370756359578518086990519993285655852781,
                11559732032986387107991004021392285783925812861821192530917403151452391805634
            ),
            (
                8495653923123431417604973247489272438418190587263600148770280649306958101930,
                4082367875863433681332203403145435568316851327593401208105741076214120093531
            )
        )
    )

_PRESETS = {
    'bn254': _bn254,
    'alt_bn128': _alt_bn128
}

@functools.lru_cache(maxsize=None)
def _preset(name: str) -> parameters:
    return _PRESETS[name]()

#
# Process-wide default parameters. Installation is serialized by the lock
# and happens at most once (until reset).
#

_lock = threading.Lock()
_installed = None

def init_public_parameters(curve: Union[str, parameters] = 'bn254') -> parameters:
    """
    Install the process-wide default parameters and return them. Repeating
    the call with the same curve has no effect; requesting a different
    curve raises an exception.

    >>> reset_public_parameters()
    >>> init_public_parameters('bn254')
    parameters('bn254')
    >>> init_public_parameters('alt_bn128') # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    bngroups.parameters.ParametersAlreadyInitialized: parameters for bn254 are already installed
    """
    global _installed # pylint: disable=global-statement
    params = curve if isinstance(curve, parameters) else parameters.from_curve(curve)

    with _lock:
        if _installed is None:
            _installed = params
            logger.info('installed public parameters for curve %s', params.name)
        elif _installed != params:
            raise ParametersAlreadyInitialized(
                'parameters for ' + _installed.name + ' are already installed'
            )

        return _installed

def public_parameters() -> parameters:
    """
    Return the installed process-wide parameters.
    """
    installed = _installed
    if installed is None:
        raise UninitializedParameters(
            'init_public_parameters() must be called before using the default parameters'
        )
    return installed

def reset_public_parameters():
    """
    Remove the installed process-wide parameters (for use in tests).
    """
    global _installed # pylint: disable=global-statement
    with _lock:
        _installed = None

if __name__ == '__main__':
    doctest.testmod() # pragma: no cover
