"""Tests for GF(256) arithmetic, polynomials and Reed-Solomon encoding."""

import random

import pytest

from qrenc.exceptions import DivisionByZeroError, InvalidArgumentError
from qrenc.galois import QR_CODE_FIELD_256, GaloisField, GaloisPoly, ReedSolomonEncoder

GF = QR_CODE_FIELD_256


def random_poly(rng, max_len=12):
    length = rng.randint(1, max_len)
    return GaloisPoly(GF, [rng.randrange(256) for _ in range(length)])


def test_tables_are_a_permutation():
    """exp() walks all 255 non-zero elements exactly once."""
    assert sorted(GF.exp(i) for i in range(255)) == list(range(1, 256))
    assert GF.exp(0) == 1
    assert GF.exp(8) == 0x1D


def test_multiply_by_inverse_is_one():
    """a * a^-1 = 1 for every non-zero a."""
    for a in range(1, 256):
        assert GF.multiply(a, GF.inverse(a)) == 1


def test_add_is_its_own_inverse():
    """a + a = 0 in characteristic 2."""
    for a in range(256):
        assert GaloisField.add_or_subtract(a, a) == 0


def test_multiply_commutes_and_distributes():
    """Field multiplication is commutative and distributes over addition."""
    rng = random.Random(18004)

    for a in range(256):
        for b in range(0, 256, 7):
            assert GF.multiply(a, b) == GF.multiply(b, a)

    for _ in range(2000):
        a, b, c = rng.randrange(256), rng.randrange(256), rng.randrange(256)
        left = GF.multiply(a, b ^ c)
        right = GF.multiply(a, b) ^ GF.multiply(a, c)
        assert left == right


def test_zero_has_no_inverse_or_log():
    """Zero can't be inverted nor has a logarithm."""
    with pytest.raises(DivisionByZeroError):
        GF.inverse(0)

    with pytest.raises(ZeroDivisionError):
        GF.inverse(0)

    with pytest.raises(InvalidArgumentError):
        GF.log(0)


def test_poly_strips_leading_zeroes():
    """Leading zero coefficients are dropped, all zeroes become [0]."""
    p = GaloisPoly(GF, [0, 0, 3, 0, 1])
    assert p.coefficients == (3, 0, 1)
    assert p.degree == 2
    assert p.get_coefficient(0) == 1
    assert p.get_coefficient(2) == 3

    z = GaloisPoly(GF, [0, 0, 0])
    assert z.is_zero
    assert z.coefficients == (0,)

    with pytest.raises(InvalidArgumentError):
        GaloisPoly(GF, [])


def test_evaluate_at_shortcuts_match_horner():
    """Evaluating at 0 and 1 gives the same as plain Horner."""
    rng = random.Random(7)

    for _ in range(50):
        p = random_poly(rng)

        for x in (0, 1, 2, 29, 255):
            expected = 0

            for c in p.coefficients:
                expected = GF.multiply(expected, x) ^ c

            assert p.evaluate_at(x) == expected


def test_add_or_subtract_pads_shorter():
    """Addition aligns the constant terms."""
    a = GaloisPoly(GF, [1, 2, 3])
    b = GaloisPoly(GF, [5])
    assert a.add_or_subtract(b).coefficients == (1, 2, 6)
    assert a.add_or_subtract(GF.zero) is a
    assert a.add_or_subtract(a).is_zero


def test_multiply_degrees_add():
    """Product of degree n and m polynomials has degree n+m."""
    a = GaloisPoly(GF, [1, 2])
    b = GaloisPoly(GF, [1, 3])
    product = a.multiply(b)
    assert product.degree == 2
    assert product.coefficients == (1, 2 ^ 3, GF.multiply(2, 3))
    assert a.multiply(GF.zero).is_zero


def test_multiply_by_monomial():
    """Shifting by x^d appends d zero coefficients."""
    p = GaloisPoly(GF, [1, 2])
    shifted = p.multiply_by_monomial(3, 2)
    assert shifted.coefficients == (2, 4, 0, 0, 0)
    assert p.multiply_by_monomial(2, 0).is_zero

    with pytest.raises(InvalidArgumentError):
        p.multiply_by_monomial(-1, 1)


def test_division_identity():
    """p = q * d + r with deg r < deg d."""
    rng = random.Random(42)

    for _ in range(200):
        p = random_poly(rng, 20)
        d = random_poly(rng, 8)

        if d.is_zero:
            continue

        quotient, remainder = p.divide(d)
        assert quotient.multiply(d).add_or_subtract(remainder) == p
        assert remainder.is_zero or remainder.degree < d.degree


def test_division_by_zero_polynomial():
    """Dividing by the zero polynomial fails."""
    with pytest.raises(DivisionByZeroError):
        GaloisPoly(GF, [1, 2, 3]).divide(GF.zero)


def test_polynomials_of_different_fields_do_not_mix():
    other = GaloisField(0x011D, 256, 1)
    a = GaloisPoly(GF, [1, 2])
    b = GaloisPoly(other, [1, 2])

    with pytest.raises(InvalidArgumentError):
        a.add_or_subtract(b)

    with pytest.raises(InvalidArgumentError):
        a.multiply(b)


def test_generator_polynomials():
    """Generators match the published alpha exponent tables."""
    rs = ReedSolomonEncoder(GF)
    gen_7 = [87, 229, 146, 149, 238, 102, 21]
    gen_10 = [251, 67, 46, 61, 118, 70, 64, 94, 32, 45]

    assert rs.build_generator(7).coefficients == tuple([1] + [GF.exp(e) for e in gen_7])
    assert rs.build_generator(10).coefficients == tuple([1] + [GF.exp(e) for e in gen_10])
    # cached instances are reused
    assert rs.build_generator(7) is rs.build_generator(7)


def test_reed_solomon_iso_example():
    """Annex I example of ISO 18004: "01234567" at 1-M."""
    data = [0x10, 0x20, 0x0C, 0x56, 0x61, 0x80, 0xEC, 0x11,
            0xEC, 0x11, 0xEC, 0x11, 0xEC, 0x11, 0xEC, 0x11]
    expected = [0xA5, 0x24, 0xD4, 0xC1, 0xED, 0x36, 0xC7, 0x87, 0x2C, 0x55]
    to_encode = data + [0] * 10

    ReedSolomonEncoder(GF).encode(to_encode, 10)

    assert to_encode[:16] == data
    assert to_encode[16:] == expected


def test_reed_solomon_hello_world():
    """The well known HELLO WORLD 1-M codewords."""
    data = [32, 91, 11, 120, 209, 114, 220, 77, 67, 64, 236, 17, 236, 17, 236, 17]
    to_encode = data + [0] * 10
    ReedSolomonEncoder(GF).encode(to_encode, 10)
    assert to_encode[16:] == [196, 35, 39, 119, 235, 215, 231, 226, 93, 23]


def test_codeword_polynomial_is_divisible_by_generator():
    """Data followed by its EC codewords is a multiple of the generator."""
    rng = random.Random(3)
    rs = ReedSolomonEncoder(GF)

    for ec in (7, 13, 22, 30):
        to_encode = [rng.randrange(256) for _ in range(20)] + [0] * ec
        rs.encode(to_encode, ec)
        _, remainder = GaloisPoly(GF, to_encode).divide(rs.build_generator(ec))
        assert remainder.is_zero


def test_reed_solomon_rejects_bad_sizes():
    """Needs both data and EC codewords."""
    rs = ReedSolomonEncoder(GF)

    with pytest.raises(InvalidArgumentError):
        rs.encode([1, 2, 3], 0)

    with pytest.raises(InvalidArgumentError):
        rs.encode([0, 0, 0], 3)
