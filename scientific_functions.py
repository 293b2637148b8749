"""Funciones científicas unarias y constantes de la calculadora."""

import enum
import math
import random


class ScientificFunction(enum.Enum):
    """Funciones que actúan de inmediato sobre el valor en pantalla.

    El valor de cada miembro es la etiqueta de su botón.
    """

    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    ASIN = "sin⁻¹"
    ACOS = "cos⁻¹"
    ATAN = "tan⁻¹"
    SINH = "sinh"
    COSH = "cosh"
    TANH = "tanh"
    ASINH = "sinh⁻¹"
    ACOSH = "cosh⁻¹"
    ATANH = "tanh⁻¹"
    SQUARE = "x²"
    CUBE = "x³"
    SQUARE_ROOT = "√x"
    CUBE_ROOT = "³√x"
    RECIPROCAL = "1/x"
    FACTORIAL = "x!"
    EXP = "eˣ"
    TEN_POWER = "10ˣ"
    TWO_POWER = "2ˣ"
    LN = "ln"
    LOG10 = "log₁₀"
    LOG2 = "log₂"


class Constant(enum.Enum):
    PI = "π"
    E = "e"
    RAND = "Rand"


def factorial(n: float) -> float:
    """Factorial en coma flotante: NaN fuera de los enteros no negativos."""
    if math.isnan(n) or n < 0:
        return math.nan
    if math.isinf(n):
        return math.inf
    if n == 0 or n == 1:
        return 1.0
    if n != math.floor(n):
        return math.nan
    if n > 170:
        return math.inf

    result = 1.0
    for i in range(2, int(n) + 1):
        result *= i
    return result


def cube_root(x: float) -> float:
    if x >= 0:
        return math.pow(x, 1.0 / 3.0)
    return -math.pow(-x, 1.0 / 3.0)


def ieee(fn):
    """Envuelve una función de ``math`` con semántica IEEE-754.

    ``math`` lanza ValueError ante errores de dominio y OverflowError ante
    desbordamientos; aquí se traducen a NaN y +inf respectivamente.
    """

    def w(*args):
        try:
            return fn(*args)
        except ValueError:
            return math.nan
        except OverflowError:
            return math.inf

    return w


class ScientificProvider:
    """Construye la tabla de despacho según el modo angular."""

    def __init__(self, use_radians: bool = False, rng: random.Random | None = None):
        self.use_radians = use_radians
        self._rng = rng if rng is not None else random.Random()
        self._tables = {}

    @property
    def angle_mode(self) -> str:
        return "rad" if self.use_radians else "deg"

    def build_table(self) -> dict:
        use_radians = self.use_radians

        def _trig(fn):
            def w(x):
                return fn(x if use_radians else math.radians(x))

            return ieee(w)

        def _inv_trig(fn):
            def w(x):
                r = fn(x)
                return r if use_radians else math.degrees(r)

            return ieee(w)

        return {
            ScientificFunction.SIN: _trig(math.sin),
            ScientificFunction.COS: _trig(math.cos),
            ScientificFunction.TAN: _trig(math.tan),
            ScientificFunction.ASIN: _inv_trig(math.asin),
            ScientificFunction.ACOS: _inv_trig(math.acos),
            ScientificFunction.ATAN: _inv_trig(math.atan),
            ScientificFunction.SINH: ieee(math.sinh),
            ScientificFunction.COSH: ieee(math.cosh),
            ScientificFunction.TANH: ieee(math.tanh),
            ScientificFunction.ASINH: ieee(math.asinh),
            ScientificFunction.ACOSH: ieee(math.acosh),
            ScientificFunction.ATANH: ieee(math.atanh),
            ScientificFunction.SQUARE: lambda x: x * x,
            ScientificFunction.CUBE: lambda x: x * x * x,
            ScientificFunction.SQUARE_ROOT: ieee(math.sqrt),
            ScientificFunction.CUBE_ROOT: ieee(cube_root),
            ScientificFunction.RECIPROCAL: lambda x: 1.0 / x,
            ScientificFunction.FACTORIAL: factorial,
            ScientificFunction.EXP: ieee(math.exp),
            ScientificFunction.TEN_POWER: ieee(lambda x: math.pow(10.0, x)),
            ScientificFunction.TWO_POWER: ieee(lambda x: math.pow(2.0, x)),
            ScientificFunction.LN: ieee(math.log),
            ScientificFunction.LOG10: ieee(math.log10),
            ScientificFunction.LOG2: ieee(lambda x: math.log(x) / math.log(2.0)),
        }

    def table(self) -> dict:
        """Tabla del modo angular actual; se construye una vez por modo."""
        if self.use_radians not in self._tables:
            self._tables[self.use_radians] = self.build_table()
        return self._tables[self.use_radians]

    def apply(self, function: ScientificFunction, x: float) -> float:
        return self.table()[function](x)

    def constant(self, constant: Constant) -> float:
        if constant is Constant.PI:
            return math.pi
        if constant is Constant.E:
            return math.exp(1.0)
        return self._rng.random()
