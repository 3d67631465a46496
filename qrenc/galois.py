#
# (c) 2023 Jouni Korhonen
#
#

from .exceptions import InvalidArgumentError, DivisionByZeroError


class GaloisField(object):
    """
    There are excellent articles about Galois Fields:
    https://en.wikipedia.org/wiki/Finite_field
    https://zavier-henry.medium.com/an-introductory-walkthrough-for-encoding-qr-codes-5a33e1e882b5
    https://www.thonky.com/qr-code-tutorial/error-correction-coding

    Parameters:
    -----------
    primitive : int
        Irreducible polynomial, bit n is the coefficient of x**n.
    size : int
        Number of field elements.
    generator_base : int
        The b in the generator polynomial (x-a**b)(x-a**(b+1))...
        QR-code uses 0.
    """
    def __init__(self, primitive : int, size : int, generator_base : int):
        self.primitive = primitive
        self.size = size
        self.generator_base = generator_base
        self.ex_to_gf = [0] * size
        self.gf_to_ex = [0] * size

        # generator a = 2, so each step is a field doubling
        gf = 1

        for n in range(size):
            self.ex_to_gf[n] = gf
            gf = gf * 2

            if (gf >= size):
                gf = gf ^ primitive
                gf = gf & (size - 1)

        for n in range(size - 1):
            self.gf_to_ex[self.ex_to_gf[n]] = n

        # gf_to_ex[0] stays 0 but must never be used
        self.zero = GaloisPoly(self, [0])
        self.one = GaloisPoly(self, [1])

    #
    @staticmethod
    def add_or_subtract(a : int, b : int) -> int:
        return a ^ b

    #
    def exp(self, a : int) -> int:
        return self.ex_to_gf[a]

    #
    def log(self, a : int) -> int:
        if (a == 0):
            raise InvalidArgumentError("log(0) is undefined")

        return self.gf_to_ex[a]

    #
    def inverse(self, a : int) -> int:
        if (a == 0):
            raise DivisionByZeroError("Zero has no multiplicative inverse")

        return self.ex_to_gf[self.size - self.gf_to_ex[a] - 1]

    #
    def multiply(self, a : int, b : int) -> int:
        if (a == 0 or b == 0):
            return 0

        return self.ex_to_gf[(self.gf_to_ex[a] + self.gf_to_ex[b]) % (self.size - 1)]

    #
    def build_monomial(self, degree : int, coefficient : int) -> "GaloisPoly":
        """Returns coefficient * x**degree."""
        if (degree < 0):
            raise InvalidArgumentError(f"Negative degree {degree}")

        if (coefficient == 0):
            return self.zero

        coefficients = [0] * (degree + 1)
        coefficients[0] = coefficient
        return GaloisPoly(self, coefficients)

    def __repr__(self):
        return f"GF(0x{self.primitive:x},{self.size})"


class GaloisPoly(object):
    """
    Polynomial over a GaloisField. Coefficients are ordered from the
    highest power down to x**0 and the leading one is never zero, except
    for the zero polynomial which is kept as [0].
    """
    def __init__(self, field : GaloisField, coefficients):
        if (len(coefficients) == 0):
            raise InvalidArgumentError("Polynomial needs at least one coefficient")

        self.field = field

        # strip leading zeroes
        first_non_zero = 0

        while (first_non_zero < len(coefficients) - 1 and coefficients[first_non_zero] == 0):
            first_non_zero += 1

        self.coefficients = tuple(coefficients[first_non_zero:])

    @property
    def degree(self) -> int:
        return len(self.coefficients) - 1

    @property
    def is_zero(self) -> bool:
        return self.coefficients[0] == 0

    def get_coefficient(self, degree : int) -> int:
        """Coefficient of the x**degree term."""
        return self.coefficients[len(self.coefficients) - 1 - degree]

    def check_field_(self, other : "GaloisPoly"):
        if (self.field is not other.field):
            raise InvalidArgumentError("Polynomials do not have the same field")

    #
    def evaluate_at(self, a : int) -> int:
        if (a == 0):
            return self.get_coefficient(0)

        if (a == 1):
            # sum of the coefficients
            result = 0

            for c in self.coefficients:
                result ^= c

            return result

        # Horner
        result = self.coefficients[0]

        for c in self.coefficients[1:]:
            result = self.field.multiply(a, result) ^ c

        return result

    #
    def add_or_subtract(self, other : "GaloisPoly") -> "GaloisPoly":
        self.check_field_(other)

        if (self.is_zero):
            return other

        if (other.is_zero):
            return self

        smaller = self.coefficients
        larger = other.coefficients

        if (len(smaller) > len(larger)):
            smaller, larger = larger, smaller

        length_diff = len(larger) - len(smaller)

        # high order terms only found in the longer one are copied as is
        sum_diff = list(larger[:length_diff])

        for i in range(length_diff, len(larger)):
            sum_diff.append(smaller[i - length_diff] ^ larger[i])

        return GaloisPoly(self.field, sum_diff)

    #
    def multiply(self, other : "GaloisPoly") -> "GaloisPoly":
        self.check_field_(other)

        if (self.is_zero or other.is_zero):
            return self.field.zero

        a = self.coefficients
        b = other.coefficients
        product = [0] * (len(a) + len(b) - 1)

        for i in range(len(a)):
            for j in range(len(b)):
                product[i + j] ^= self.field.multiply(a[i], b[j])

        return GaloisPoly(self.field, product)

    #
    def multiply_scalar(self, scalar : int) -> "GaloisPoly":
        if (scalar == 0):
            return self.field.zero

        if (scalar == 1):
            return self

        return GaloisPoly(self.field, [self.field.multiply(c, scalar) for c in self.coefficients])

    #
    def multiply_by_monomial(self, degree : int, coefficient : int) -> "GaloisPoly":
        """Returns self * coefficient * x**degree."""
        if (degree < 0):
            raise InvalidArgumentError(f"Negative degree {degree}")

        if (coefficient == 0):
            return self.field.zero

        product = [self.field.multiply(c, coefficient) for c in self.coefficients]
        product.extend([0] * degree)
        return GaloisPoly(self.field, product)

    #
    def divide(self, other : "GaloisPoly"):
        """
        Long division in the field.

        Returns:
        --------
            tuple (quotient, remainder)

        Raises:
        -------
        DivisionByZeroError
            If other is the zero polynomial.
        """
        self.check_field_(other)

        if (other.is_zero):
            raise DivisionByZeroError("Divide by 0")

        quotient = self.field.zero
        remainder = self
        inverse_leading = self.field.inverse(other.get_coefficient(other.degree))

        # remainder.degree drops on every round
        while (remainder.degree >= other.degree and not remainder.is_zero):
            degree_diff = remainder.degree - other.degree
            scale = self.field.multiply(remainder.get_coefficient(remainder.degree), inverse_leading)
            term = other.multiply_by_monomial(degree_diff, scale)
            quotient = quotient.add_or_subtract(self.field.build_monomial(degree_diff, scale))
            remainder = remainder.add_or_subtract(term)

        return quotient, remainder

    def __eq__(self, other):
        if (not isinstance(other, GaloisPoly)):
            return NotImplemented

        return self.field is other.field and self.coefficients == other.coefficients

    def __hash__(self):
        return hash(self.coefficients)

    def __str__(self):
        if (self.is_zero):
            return "0"

        terms = []

        for degree in range(self.degree, -1, -1):
            c = self.get_coefficient(degree)

            if (c == 0):
                continue

            term = ""

            if (degree == 0 or c != 1):
                power = self.field.log(c)
                term = "1" if power == 0 else ("a" if power == 1 else f"a^{power}")

            if (degree == 1):
                term += "x"
            elif (degree > 1):
                term += f"x^{degree}"

            terms.append(term)

        return " + ".join(terms)

    def __repr__(self):
        return f"GaloisPoly({list(self.coefficients)})"


# x^8 + x^4 + x^3 + x^2 + 1
QR_CODE_FIELD_256 = GaloisField(0x011D, 256, 0)


class ReedSolomonEncoder(object):
    """
    The generator polynomial is created by multiplying together
    (x-a**b) through (x-a**(b+n-1)), where n is the number of error
    codewords to be generated, a = 2 and b the field's generator base.

    For more information see:
    https://www.thonky.com/qr-code-tutorial/how-create-generator-polynomial

    Generators are cached per encoder instance.
    """
    def __init__(self, field : GaloisField=QR_CODE_FIELD_256):
        self.field = field
        self.cached_generators = [GaloisPoly(field, [1])]

    #
    def build_generator(self, degree : int) -> GaloisPoly:
        if (degree >= len(self.cached_generators)):
            last = self.cached_generators[-1]

            for d in range(len(self.cached_generators), degree + 1):
                root = self.field.exp(d - 1 + self.field.generator_base)
                last = last.multiply(GaloisPoly(self.field, [1, root]))
                self.cached_generators.append(last)

        return self.cached_generators[degree]

    #
    def encode(self, to_encode : list, ec_bytes : int):
        """
        Computes ec_bytes error correction codewords for the data in the
        front of to_encode and writes them into its last ec_bytes slots.

        Parameters:
        -----------
        to_encode : list
            Data codewords followed by ec_bytes placeholder entries.
        ec_bytes : int
            Number of error correction codewords.
        """
        if (ec_bytes <= 0):
            raise InvalidArgumentError("No error correction bytes")

        data_bytes = len(to_encode) - ec_bytes

        if (data_bytes <= 0):
            raise InvalidArgumentError("No data bytes provided")

        generator = self.build_generator(ec_bytes)
        info = GaloisPoly(self.field, to_encode[:data_bytes])
        info = info.multiply_by_monomial(ec_bytes, 1)
        _, remainder = info.divide(generator)

        coefficients = remainder.coefficients
        num_zero = ec_bytes - len(coefficients)

        for i in range(num_zero):
            to_encode[data_bytes + i] = 0

        to_encode[data_bytes + num_zero:] = coefficients
