"""
.. module:: groups

groups module
=============

This module exports the classes :obj:`~bngroups.groups.point` and
:obj:`~bngroups.groups.point2` for representing elements of the groups G1
(a curve over the base field *F_p*) and G2 (its sextic twist over *F_p^2*)
of a BN curve, as well as the primitive operations :obj:`ser`,
:obj:`des`, and :obj:`write`.

Points are stored in Jacobian coordinates (*X*, *Y*, *Z*), which represent
the affine point (*X*/*Z*\\ :sup:`2`, *Y*/*Z*\\ :sup:`3`). The identity has
*Z* = 0. A point with *Z* = 1 is *special* (normalized) and can be used as
the right-hand operand of the cheaper mixed addition formula.

>>> from bngroups.parameters import init_public_parameters
>>> _ = init_public_parameters('bn254')
>>> a = point.random()
>>> b = point.random()
>>> a + b == b + a
True
>>> a.dbl() == a + a
True
>>> point.order() * a == point.zero()
True

Points are immutable values. Every operation returns a new point and
leaves its operands unchanged, so operands can be reused freely.

>>> q = point2.random()
>>> q.mul_by_q() == point2.base_field_char() * q
True
>>> point2.from_str(str(q)) == q
True
"""
from __future__ import annotations
from typing import Any, NoReturn, Optional, TextIO, Tuple, Type, Union
import doctest
import logging
import secrets

from bngroups.fields import fp, fp2
from bngroups.parameters import parameters, public_parameters

logger = logging.getLogger(__name__)

class DeserializationError(ValueError):
    """
    Raised when text supplied for decoding does not describe a valid
    group element.
    """

class _point:
    """
    Group law, scalar multiplication, and serialization shared by the
    classes :obj:`point` and :obj:`point2`. Subclasses define the
    coordinate field and select the curve coefficient and generator.
    """
    __slots__ = ('x', 'y', 'z', 'params')

    _field: Union[Type[fp], Type[fp2]] = None

    def __init__(
            self: _point,
            x: Union[fp, fp2],
            y: Union[fp, fp2],
            z: Union[fp, fp2],
            params: parameters
        ):
        self.x = x
        self.y = y
        self.z = z
        self.params = params

    @classmethod
    def _coefficient(cls, params: parameters) -> Union[fp, fp2]:
        raise NotImplementedError # pragma: no cover

    @classmethod
    def _generator(cls, params: parameters) -> Tuple[Any, Any]:
        raise NotImplementedError # pragma: no cover

    def _in_subgroup(self: _point) -> bool:
        raise NotImplementedError # pragma: no cover

    @classmethod
    def zero(cls, params: Optional[parameters] = None) -> _point:
        """
        Return the identity element.

        >>> point.zero().is_zero()
        True
        >>> point.zero().dbl() == point.zero()
        True
        """
        params = public_parameters() if params is None else params
        field = cls._field
        return cls(field.zero(params.p), field.one(params.p), field.zero(params.p), params)

    @classmethod
    def one(cls, params: Optional[parameters] = None) -> _point:
        """
        Return the designated generator of the group (in special form).

        >>> g = point.one()
        >>> g.is_special() and not g.is_zero()
        True
        """
        params = public_parameters() if params is None else params
        (x, y) = cls._generator(params)
        return cls(x, y, cls._field.one(params.p), params)

    @classmethod
    def random(cls, params: Optional[parameters] = None) -> _point:
        """
        Return a uniformly sampled non-identity element, obtained by
        multiplying the generator by a random scalar in ``[1, r - 1]``.

        >>> point.random().is_zero()
        False
        """
        params = public_parameters() if params is None else params
        return (secrets.randbelow(params.r - 1) + 1) * cls.one(params)

    @classmethod
    def from_affine(
            cls,
            x: Union[fp, fp2],
            y: Union[fp, fp2],
            params: Optional[parameters] = None
        ) -> _point:
        """
        Return the point with the supplied affine coordinates if it is on
        the curve and in the subgroup of order *r*.

        >>> (x, y) = point.one().to_affine()
        >>> point.from_affine(x, y) == point.one()
        True
        >>> point.from_affine(x, y + 1)
        Traceback (most recent call last):
          ...
        ValueError: coordinates do not satisfy the curve equation
        """
        params = public_parameters() if params is None else params
        if not (isinstance(x, cls._field) and isinstance(y, cls._field)):
            raise TypeError('coordinates must be ' + cls._field.__name__ + ' instances')
        if x.p != params.p or y.p != params.p:
            raise ValueError('coordinates belong to a different field')

        p = cls(x, y, cls._field.one(params.p), params)
        if not p.is_well_formed():
            raise ValueError('coordinates do not satisfy the curve equation')
        if not p._in_subgroup(): # pylint: disable=protected-access
            raise ValueError('point is not in the prime-order subgroup')

        return p

    @classmethod
    def order(cls, params: Optional[parameters] = None) -> int:
        """
        Return the (prime) order of the group.
        """
        params = public_parameters() if params is None else params
        return params.r

    @classmethod
    def base_field_char(cls, params: Optional[parameters] = None) -> int:
        """
        Return the characteristic of the base field.
        """
        params = public_parameters() if params is None else params
        return params.p

    def is_zero(self: _point) -> bool:
        """
        Return whether this point is the identity.

        >>> point.zero().is_zero(), point.one().is_zero()
        (True, False)
        """
        return self.z.is_zero()

    def is_special(self: _point) -> bool:
        """
        Return whether this point can be the right-hand operand of
        :obj:`mixed_add` (*i.e.*, it is the identity or has *Z* = 1).
        """
        return self.is_zero() or self.z.is_one()

    def is_well_formed(self: _point) -> bool:
        """
        Return whether the coordinates satisfy the curve equation
        *Y*\\ :sup:`2` = *X*\\ :sup:`3` + *b* *Z*\\ :sup:`6`.

        >>> point.random().is_well_formed()
        True
        """
        if self.is_zero():
            return True

        z2 = self.z * self.z
        z6 = z2 * z2 * z2
        return self.y * self.y == self.x * self.x * self.x + self._coefficient(self.params) * z6

    def to_special(self: _point) -> _point:
        """
        Return the representative of this point that has *Z* = 1. The
        identity has no such representative and is returned unchanged.

        >>> a = point.random() + point.random()
        >>> s = a.to_special()
        >>> s.is_special() and s == a
        True
        """
        if self.is_special():
            return self

        (x, y) = self.to_affine()
        return self.__class__(x, y, self._field.one(self.params.p), self.params)

    def to_affine(self: _point) -> Optional[Tuple[Any, Any]]:
        """
        Return the affine coordinates of this point, or ``None`` for the
        identity.
        """
        if self.is_zero():
            return None
        if self.z.is_one():
            return (self.x, self.y)

        z_inv = self.z.inverse()
        z2_inv = z_inv * z_inv
        return (self.x * z2_inv, self.y * z2_inv * z_inv)

    def _check(self: _point, other: Any):
        if not isinstance(other, self.__class__):
            raise TypeError(
                'expecting ' + self.__class__.__name__ + ' instance ' +
                'but received ' + other.__class__.__name__ + ' instance'
            )
        if other.params is not self.params and other.params != self.params:
            raise ValueError('points belong to groups with different parameters')

    def dbl(self: _point) -> _point:
        """
        Return the result of adding this point to itself.

        >>> a = point2.random()
        >>> a.dbl() == a + a
        True
        """
        if self.is_zero():
            return self

        # Doubling formula dbl-2009-l for curves with *a* = 0.
        a = self.x * self.x
        b = self.y * self.y
        c = b * b
        t = self.x + b
        d = (t * t - a - c) * 2
        e = a * 3
        f = e * e
        x3 = f - d * 2
        y3 = e * (d - x3) - c * 8
        z3 = self.y * self.z * 2
        return self.__class__(x3, y3, z3, self.params)

    def add(self: _point, other: _point) -> _point:
        """
        Return the sum of this point and another point.

        >>> a = point.random()
        >>> a.add(point.zero()) == a and point.zero().add(a) == a
        True
        >>> a.add(-a).is_zero()
        True
        """
        self._check(other)
        if self.is_zero():
            return other
        if other.is_zero():
            return self

        # Addition formula add-2007-bl.
        z1z1 = self.z * self.z
        z2z2 = other.z * other.z
        u1 = self.x * z2z2
        u2 = other.x * z1z1
        s1 = self.y * other.z * z2z2
        s2 = other.y * self.z * z1z1

        if u1 == u2:
            return self.dbl() if s1 == s2 else self.zero(self.params)

        h = u2 - u1
        i = h * 2
        i = i * i
        j = h * i
        r = (s2 - s1) * 2
        v = u1 * i
        x3 = r * r - j - v * 2
        y3 = r * (v - x3) - s1 * j * 2
        t = self.z + other.z
        z3 = (t * t - z1z1 - z2z2) * h
        return self.__class__(x3, y3, z3, self.params)

    def mixed_add(self: _point, other: _point) -> _point:
        """
        Return the sum of this point and a special point (see
        :obj:`to_special`) using fewer field multiplications than
        :obj:`add`.

        >>> a = point.random()
        >>> b = point.random().to_special()
        >>> a.mixed_add(b) == a + b
        True
        >>> a.mixed_add(a.to_special()) == a.dbl()
        True
        """
        self._check(other)
        assert other.is_special(), 'right-hand operand must be special'
        if other.is_zero():
            return self
        if self.is_zero():
            return other

        # Mixed addition formula madd-2007-bl (*Z2* = 1).
        z1z1 = self.z * self.z
        u2 = other.x * z1z1
        s2 = other.y * self.z * z1z1

        if self.x == u2:
            return self.dbl() if self.y == s2 else self.zero(self.params)

        h = u2 - self.x
        hh = h * h
        i = hh * 4
        j = h * i
        r = (s2 - self.y) * 2
        v = self.x * i
        x3 = r * r - j - v * 2
        y3 = r * (v - x3) - self.y * j * 2
        t = self.z + h
        z3 = t * t - z1z1 - hh
        return self.__class__(x3, y3, z3, self.params)

    def negate(self: _point) -> _point:
        """
        Return the additive inverse of this point.

        >>> a = point.random()
        >>> a.negate().negate() == a
        True
        """
        return self.__class__(self.x, -self.y, self.z, self.params)

    def scalar_mul(self: _point, k: int) -> _point:
        """
        Return the result of adding this point to itself ``k`` times. The
        scalar is not reduced; a negative scalar multiplies the inverse of
        this point.

        >>> a = point.random()
        >>> a.scalar_mul(0).is_zero()
        True
        >>> a.scalar_mul(3) == a + a + a
        True
        >>> a.scalar_mul(-1) == -a
        True
        """
        if not isinstance(k, int) or isinstance(k, bool):
            raise TypeError('point can only be multiplied by an integer scalar')
        if k < 0:
            return self.negate().scalar_mul(-k)

        result = self.zero(self.params)
        if k == 0 or self.is_zero():
            return result

        # Most-significant bit first; each addition is a mixed addition.
        base = self.to_special()
        for bit in bin(k)[2:]:
            result = result.dbl()
            if bit == '1':
                result = result.mixed_add(base)

        return result

    def __add__(self: _point, other: _point) -> _point:
        """
        Return the sum of two points (see :obj:`add`).

        >>> a = point2.random()
        >>> a + point2.zero() == a
        True
        """
        return self.add(other)

    def __sub__(self: _point, other: _point) -> _point:
        """
        Return the result of subtracting another point from this point.

        >>> a = point.random()
        >>> b = point.random()
        >>> a - b == a + (-b)
        True
        """
        self._check(other)
        return self.add(other.negate())

    def __neg__(self: _point) -> _point:
        """
        Return the additive inverse of this point.

        >>> a = point.random()
        >>> (a + (-a)).is_zero()
        True
        """
        return self.negate()

    def __mul__(self: _point, other: Any) -> NoReturn:
        """
        A point cannot be a left-hand argument.

        >>> point.one() * 2
        Traceback (most recent call last):
          ...
        TypeError: point must be on right-hand side of multiplication operator
        """
        raise TypeError(
            'point must be on right-hand side of multiplication operator'
        )

    def __rmul__(self: _point, other: Any) -> _point:
        """
        Multiply this point by an integer scalar.

        >>> 2 * point.one() == point.one().dbl()
        True
        >>> 2.0 * point.one()
        Traceback (most recent call last):
          ...
        TypeError: point can only be multiplied by an integer scalar
        """
        return self.scalar_mul(other)

    def __eq__(self: _point, other: Any) -> bool:
        """
        Return whether two points denote the same group element, regardless
        of their coordinate representations.

        >>> a = point.random()
        >>> (a + a + a) == (a.dbl() + a).to_special()
        True
        """
        if not isinstance(other, _point):
            return NotImplemented
        if other.__class__ is not self.__class__:
            return False
        if other.params is not self.params and other.params != self.params:
            return False

        if self.is_zero() or other.is_zero():
            return self.is_zero() and other.is_zero()

        # Cross-multiply to compare (X1/Z1^2, Y1/Z1^3) and (X2/Z2^2, Y2/Z2^3).
        z1z1 = self.z * self.z
        z2z2 = other.z * other.z
        return (
            self.x * z2z2 == other.x * z1z1 and
            self.y * z2z2 * other.z == other.y * z1z1 * self.z
        )

    def __hash__(self: _point) -> int:
        return hash((self.__class__.__name__, self.to_affine()))

    def to_str(self: _point) -> str:
        """
        Return the text representation of this point: an identity flag
        followed by the decimal affine coordinates (all zero for the
        identity).

        >>> point.zero().to_str()
        '1 0 0'
        >>> point.from_str(point.one().to_str()) == point.one()
        True
        """
        if self.is_zero():
            field = self._field
            (x, y) = (field.zero(self.params.p), field.zero(self.params.p))
            return '1 ' + str(x) + ' ' + str(y)

        (x, y) = self.to_affine()
        return '0 ' + str(x) + ' ' + str(y)

    def __str__(self: _point) -> str:
        """
        Return the text representation of this point (see :obj:`to_str`).

        >>> str(point2.zero())
        '1 0 0 0 0'
        """
        return self.to_str()

    def __repr__(self: _point) -> str:
        return self.__class__.__name__ + "('" + self.to_str() + "')"

    @classmethod
    def _tokens(cls) -> int:
        return 1 + 2 * cls._field.degree

    @classmethod
    def _parse(cls, tokens: list, params: parameters) -> _point:
        if len(tokens) != cls._tokens():
            raise DeserializationError(
                'expecting ' + str(cls._tokens()) + ' tokens ' +
                'but received ' + str(len(tokens))
            )

        (flag, coordinates) = (tokens[0], tokens[1:])
        if flag not in ('0', '1'):
            raise DeserializationError('identity flag must be 0 or 1')

        degree = cls._field.degree
        try:
            x = cls._field.from_str(' '.join(coordinates[:degree]), params.p)
            y = cls._field.from_str(' '.join(coordinates[degree:]), params.p)
        except ValueError as e:
            raise DeserializationError('invalid coordinate: ' + str(e)) from e

        if flag == '1':
            if not (x.is_zero() and y.is_zero()):
                raise DeserializationError('identity must have zero coordinates')
            return cls.zero(params)

        p = cls(x, y, cls._field.one(params.p), params)
        if not p.is_well_formed():
            raise DeserializationError('coordinates do not satisfy the curve equation')
        if not p._in_subgroup(): # pylint: disable=protected-access
            raise DeserializationError('point is not in the prime-order subgroup')

        return p

    @classmethod
    def from_str(cls, s: str, params: Optional[parameters] = None) -> _point:
        """
        Decode a point from its text representation (see :obj:`to_str`).

        >>> point.from_str('1 0 0') == point.zero()
        True
        >>> point.from_str('0 1 1') # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
          ...
        bngroups.groups.DeserializationError: coordinates do not satisfy the curve equation
        """
        params = public_parameters() if params is None else params
        try:
            return cls._parse(s.split(), params)
        except DeserializationError as e:
            logger.debug('rejected %s text: %s', cls.__name__, e)
            raise

    @classmethod
    def read(cls, stream: TextIO, params: Optional[parameters] = None) -> _point:
        """
        Read exactly one point from a text stream, leaving any subsequent
        content of the stream unread.

        >>> import io
        >>> a = point.random()
        >>> stream = io.StringIO()
        >>> write(point.zero(), stream)
        >>> write(a, stream)
        >>> _ = stream.seek(0)
        >>> point.read(stream).is_zero() and point.read(stream) == a
        True
        """
        params = public_parameters() if params is None else params
        tokens = []
        token = ''
        while len(tokens) < cls._tokens():
            c = stream.read(1)
            if c == '' or c.isspace():
                if token != '':
                    tokens.append(token)
                    token = ''
                if c == '':
                    break
            else:
                token += c

        if len(tokens) < cls._tokens():
            logger.debug('truncated %s stream', cls.__name__)
            raise DeserializationError('stream ended before a complete point was read')

        try:
            return cls._parse(tokens, params)
        except DeserializationError as e:
            logger.debug('rejected %s text: %s', cls.__name__, e)
            raise

class point(_point): # pylint: disable=invalid-name
    """
    Element of the group G1 of points on *y*\\ :sup:`2` = *x*\\ :sup:`3` + *b*
    over *F_p*.

    >>> p = point.random()
    >>> p + point.zero() == p
    True
    >>> point.order() * p == point.zero()
    True
    """
    __slots__ = ()

    _field = fp

    @classmethod
    def _coefficient(cls, params: parameters) -> fp:
        return params.b

    @classmethod
    def _generator(cls, params: parameters) -> Tuple[fp, fp]:
        return params.g1

    def _in_subgroup(self: point) -> bool:
        # BN curves have prime order, so every point on the curve is in G1.
        return True

class point2(_point): # pylint: disable=invalid-name
    """
    Element of the group G2 of points of order *r* on the twisted curve
    *y*\\ :sup:`2` = *x*\\ :sup:`3` + *b'* over *F_p^2*.

    >>> q = point2.random()
    >>> q - q == point2.zero()
    True
    >>> point2.order() * q == point2.zero()
    True
    """
    __slots__ = ()

    _field = fp2

    @classmethod
    def _coefficient(cls, params: parameters) -> fp2:
        return params.b2

    @classmethod
    def _generator(cls, params: parameters) -> Tuple[fp2, fp2]:
        return params.g2

    def _in_subgroup(self: point2) -> bool:
        return self.scalar_mul(self.params.r).is_zero()

    def mul_by_q(self: point2) -> point2:
        """
        Apply the Frobenius endomorphism, which maps this point to the same
        result as multiplying it by the base field characteristic.

        >>> q = point2.random()
        >>> q.mul_by_q() == point2.base_field_char() * q
        True
        >>> point2.zero().mul_by_q().is_zero()
        True
        """
        return point2(
            self.x.conj() * self.params.frobenius_x,
            self.y.conj() * self.params.frobenius_y,
            self.z.conj(),
            self.params
        )

def ser(p: _point) -> str:
    """
    Return the text representation of a point.

    >>> des(ser(point.one()), point) == point.one()
    True
    """
    return p.to_str()

def des(s: str, cls: Type[_point] = point, params: Optional[parameters] = None) -> _point:
    """
    Decode a point of the group represented by ``cls`` from its text
    representation.

    >>> q = point2.random()
    >>> des(ser(q), point2) == q
    True
    """
    return cls.from_str(s, params)

def write(p: _point, stream: TextIO):
    """
    Write the text representation of a point, followed by a newline, to a
    text stream.
    """
    stream.write(p.to_str() + '\n')

if __name__ == '__main__':
    doctest.testmod() # pragma: no cover
