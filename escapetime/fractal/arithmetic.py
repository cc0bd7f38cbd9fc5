from dataclasses import dataclass

from numba import njit

from escapetime.utils.constants import BREAKOUT_R2


@dataclass(frozen=True)
class ComplexValue:
    real: float
    imag: float

    @classmethod
    def from_complex(cls, value: complex) -> "ComplexValue":
        value = complex(value)
        return cls(value.real, value.imag)

    def __add__(self, other):
        if isinstance(other, (int, float)):
            return ComplexValue(self.real + other, self.imag)
        return ComplexValue(self.real + other.real, self.imag + other.imag)

    def __mul__(self, other):
        if isinstance(other, (int, float)):
            return ComplexValue(self.real * other, self.imag * other)
        real = self.real * other.real - self.imag * other.imag
        imag = self.real * other.imag + self.imag * other.real
        return ComplexValue(real, imag)

    def __complex__(self):
        return complex(self.real, self.imag)

    def square(self) -> "ComplexValue":
        return ComplexValue(*square(self.real, self.imag))

    def abs_2(self):
        return sq_mod(self.real, self.imag)

    def escaped(self, radius_2=BREAKOUT_R2):
        return escaped(sq_mod(self.real, self.imag), radius_2)


# The helpers below work on (real, imag) pairs so the compiled kernels never
# need to box a value type.


@njit(nogil=True)
def sq_mod(real, imag):
    return real * real + imag * imag


@njit(nogil=True)
def square(real, imag):
    return real * real - imag * imag, 2 * real * imag


@njit(nogil=True)
def add(real_a, imag_a, real_b, imag_b):
    return real_a + real_b, imag_a + imag_b


@njit(nogil=True)
def escaped(size, radius_2):
    # nan and inf are both treated as having escaped
    return not size <= radius_2
