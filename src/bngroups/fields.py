"""
.. module:: fields

fields module
=============

This module exports the classes :obj:`~bngroups.fields.fp` and
:obj:`~bngroups.fields.fp2` for representing elements of a prime field
*F_p* and of its quadratic extension *F_p^2* = *F_p* [*i*] / (*i*\\ :sup:`2` + 1).
These are the coordinate types of the points defined in
:obj:`~bngroups.groups`.

Instances are immutable values. Every operator returns a new instance
and no instance is ever modified after construction.

>>> p = 0x2523648240000001ba344d80000000086121000000000013a700000000000013
>>> a = fp(5, p)
>>> (a * a.inverse()).is_one()
True
>>> z = fp2(3, 4, p)
>>> z * z.conj() == fp2(25, 0, p)
True
"""
from __future__ import annotations
from typing import Any, Optional, Union
import doctest
import secrets
from bn254 import big as bn

class fp:
    """
    Element of the prime field *F_p*, stored as its least non-negative
    residue.

    >>> p = 19
    >>> fp(7, p) + fp(15, p)
    fp(3)
    >>> fp(-1, p) == fp(18, p)
    True
    """
    __slots__ = ('n', 'p')

    degree = 1 # Number of base-field components (and of decimal tokens).

    def __init__(self: fp, n: int, p: int):
        self.n = n % p
        self.p = p

    @classmethod
    def zero(cls, p: int) -> fp:
        return cls(0, p)

    @classmethod
    def one(cls, p: int) -> fp:
        return cls(1, p)

    @classmethod
    def random(cls, p: int) -> fp:
        """
        Return a uniformly sampled element.

        >>> fp.random(19).n < 19
        True
        """
        return cls(secrets.randbelow(p), p)

    @classmethod
    def from_str(cls, s: str, p: int) -> fp:
        """
        Parse the decimal representation of an element. Only the canonical
        range ``[0, p)`` is accepted.

        >>> fp.from_str('18', 19)
        fp(18)
        >>> fp.from_str('19', 19)
        Traceback (most recent call last):
          ...
        ValueError: field element is not below the modulus
        >>> fp.from_str('07', 19)
        Traceback (most recent call last):
          ...
        ValueError: field element must not have leading zeros
        """
        if not (s.isascii() and s.isdigit()):
            raise ValueError('field element must be a non-negative decimal integer')
        if len(s) > 1 and s[0] == '0':
            raise ValueError('field element must not have leading zeros')

        n = int(s)
        if n >= p:
            raise ValueError('field element is not below the modulus')

        return cls(n, p)

    def _coerce(self: fp, other: Union[fp, int]) -> int:
        if isinstance(other, int):
            return other
        if isinstance(other, fp) and other.p == self.p:
            return other.n
        raise TypeError('operands must be elements of the same prime field')

    def __add__(self: fp, other: Union[fp, int]) -> fp:
        return fp(self.n + self._coerce(other), self.p)

    __radd__ = __add__

    def __sub__(self: fp, other: Union[fp, int]) -> fp:
        return fp(self.n - self._coerce(other), self.p)

    def __rsub__(self: fp, other: int) -> fp:
        return fp(self._coerce(other) - self.n, self.p)

    def __mul__(self: fp, other: Union[fp, int]) -> fp:
        return fp(self.n * self._coerce(other), self.p)

    __rmul__ = __mul__

    def __truediv__(self: fp, other: fp) -> fp:
        return self * other.inverse()

    def __neg__(self: fp) -> fp:
        return fp(-self.n, self.p)

    def __pow__(self: fp, e: int) -> fp:
        return fp(pow(self.n, e, self.p), self.p)

    def inverse(self: fp) -> fp:
        """
        Return the multiplicative inverse of this element.

        >>> fp(3, 19).inverse()
        fp(13)
        >>> fp(0, 19).inverse()
        Traceback (most recent call last):
          ...
        ZeroDivisionError: zero has no multiplicative inverse
        """
        if self.n == 0:
            raise ZeroDivisionError('zero has no multiplicative inverse')
        return fp(bn.invmodp(self.n, self.p), self.p)

    def sqrt(self: fp) -> Optional[fp]:
        """
        Return a square root of this element if one exists; otherwise,
        return ``None``. The modulus must be congruent to 3 modulo 4.

        >>> fp(5, 19).sqrt() ** 2
        fp(5)
        >>> fp(2, 19).sqrt() is None
        True
        """
        s = fp(pow(self.n, (self.p + 1) // 4, self.p), self.p)
        return s if s * s == self else None

    def conj(self: fp) -> fp:
        """
        Frobenius map; the identity on the prime field.
        """
        return self

    def is_zero(self: fp) -> bool:
        return self.n == 0

    def is_one(self: fp) -> bool:
        return self.n == 1

    def __eq__(self: fp, other: Any) -> bool:
        if isinstance(other, fp):
            return self.n == other.n and self.p == other.p
        return NotImplemented

    def __hash__(self: fp) -> int:
        return hash((self.n, self.p))

    def __int__(self: fp) -> int:
        return self.n

    def __str__(self: fp) -> str:
        return str(self.n)

    def __repr__(self: fp) -> str:
        return 'fp(' + str(self.n) + ')'

class fp2:
    """
    Element *c0* + *c1* *i* of the quadratic extension field *F_p^2*, in which
    *i*\\ :sup:`2` = -1. The prime *p* must be congruent to 3 modulo 4 so that
    -1 is a quadratic non-residue.

    >>> p = 19
    >>> i = fp2(0, 1, p)
    >>> i * i == fp2(-1, 0, p)
    True
    >>> str(fp2(2, 5, p))
    '2 5'
    """
    __slots__ = ('c0', 'c1', 'p')

    degree = 2

    def __init__(self: fp2, c0: int, c1: int, p: int):
        self.c0 = c0 % p
        self.c1 = c1 % p
        self.p = p

    @classmethod
    def zero(cls, p: int) -> fp2:
        return cls(0, 0, p)

    @classmethod
    def one(cls, p: int) -> fp2:
        return cls(1, 0, p)

    @classmethod
    def random(cls, p: int) -> fp2:
        return cls(secrets.randbelow(p), secrets.randbelow(p), p)

    @classmethod
    def from_str(cls, s: str, p: int) -> fp2:
        """
        Parse the two whitespace-separated decimal components of an element.

        >>> fp2.from_str('4 7', 19)
        fp2(4, 7)
        >>> fp2.from_str('4', 19)
        Traceback (most recent call last):
          ...
        ValueError: extension field element must have exactly two components
        """
        components = s.split()
        if len(components) != 2:
            raise ValueError('extension field element must have exactly two components')

        (c0, c1) = (fp.from_str(c, p) for c in components)
        return cls(c0.n, c1.n, p)

    def _coerce(self: fp2, other: Union[fp2, fp, int]) -> fp2:
        if isinstance(other, fp2) and other.p == self.p:
            return other
        if isinstance(other, fp) and other.p == self.p:
            return fp2(other.n, 0, self.p)
        if isinstance(other, int):
            return fp2(other, 0, self.p)
        raise TypeError('operands must be elements of the same extension field')

    def __add__(self: fp2, other: Union[fp2, fp, int]) -> fp2:
        other = self._coerce(other)
        return fp2(self.c0 + other.c0, self.c1 + other.c1, self.p)

    __radd__ = __add__

    def __sub__(self: fp2, other: Union[fp2, fp, int]) -> fp2:
        other = self._coerce(other)
        return fp2(self.c0 - other.c0, self.c1 - other.c1, self.p)

    def __rsub__(self: fp2, other: Union[fp, int]) -> fp2:
        return self._coerce(other) - self

    def __mul__(self: fp2, other: Union[fp2, fp, int]) -> fp2:
        other = self._coerce(other)
        # Karatsuba: three base-field multiplications.
        (a, b, c, d) = (self.c0, self.c1, other.c0, other.c1)
        ac = a * c
        bd = b * d
        return fp2(ac - bd, (a + b) * (c + d) - ac - bd, self.p)

    __rmul__ = __mul__

    def __truediv__(self: fp2, other: Union[fp2, fp, int]) -> fp2:
        return self * self._coerce(other).inverse()

    def __neg__(self: fp2) -> fp2:
        return fp2(-self.c0, -self.c1, self.p)

    def __pow__(self: fp2, e: int) -> fp2:
        """
        Raise this element to a non-negative integer power.

        >>> z = fp2(3, 4, 19)
        >>> z ** 3 == z * z * z
        True
        >>> z ** 0
        fp2(1, 0)
        """
        result = fp2.one(self.p)
        base = self
        while e > 0:
            if e & 1:
                result = result * base
            base = base * base
            e >>= 1
        return result

    def inverse(self: fp2) -> fp2:
        """
        Return the multiplicative inverse of this element.

        >>> z = fp2(3, 4, 19)
        >>> (z * z.inverse()).is_one()
        True
        """
        norm = (self.c0 * self.c0 + self.c1 * self.c1) % self.p
        if norm == 0:
            raise ZeroDivisionError('zero has no multiplicative inverse')
        t = bn.invmodp(norm, self.p)
        return fp2(self.c0 * t, -self.c1 * t, self.p)

    def sqrt(self: fp2) -> Optional[fp2]:
        """
        Return a square root of this element if one exists; otherwise,
        return ``None``.

        >>> z = fp2(3, 4, 19)
        >>> s = (z * z).sqrt()
        >>> s * s == z * z
        True
        """
        # Complex method for moduli congruent to 3 modulo 4.
        a1 = self ** ((self.p - 3) // 4)
        alpha = a1 * (a1 * self)
        if (alpha.conj() * alpha) == fp2(-1, 0, self.p):
            return None

        x0 = a1 * self
        if alpha == fp2(-1, 0, self.p):
            x = fp2(0, 1, self.p) * x0
        else:
            x = ((alpha + 1) ** ((self.p - 1) // 2)) * x0

        return x if x * x == self else None

    def conj(self: fp2) -> fp2:
        """
        Return the conjugate of this element, which is its image under the
        *p*-power Frobenius map.

        >>> fp2(3, 4, 19).conj()
        fp2(3, 15)
        """
        return fp2(self.c0, -self.c1, self.p)

    def is_zero(self: fp2) -> bool:
        return self.c0 == 0 and self.c1 == 0

    def is_one(self: fp2) -> bool:
        return self.c0 == 1 and self.c1 == 0

    def __eq__(self: fp2, other: Any) -> bool:
        if isinstance(other, fp2):
            return (self.c0, self.c1, self.p) == (other.c0, other.c1, other.p)
        return NotImplemented

    def __hash__(self: fp2) -> int:
        return hash((self.c0, self.c1, self.p))

    def __str__(self: fp2) -> str:
        return str(self.c0) + ' ' + str(self.c1)

    def __repr__(self: fp2) -> str:
        return 'fp2(' + str(self.c0) + ', ' + str(self.c1) + ')'

if __name__ == '__main__':
    doctest.testmod() # pragma: no cover
