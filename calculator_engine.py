"""
Motor de cálculo para la calculadora científica.

Este módulo provee la clase CalculatorEngine, la máquina de estados que
convierte pulsaciones de teclas en un valor numérico y un texto de pantalla.
La evaluación es inmediata y de izquierda a derecha, como en una calculadora
de bolsillo: no hay precedencia de operadores.

Contrato de interfaz:
    - un método input_*/memory_*/toggle_* por acción del usuario
    - display_text, is_all_clear, active_operation, is_second_function,
      use_radians: proyecciones de solo lectura para la interfaz
    - add_listener(callback): notificación tras cada acción
"""

import dataclasses
import enum
import functools
import logging
import math
import random

from number_formatter import ERROR_TEXT, format_number, parse_display
from scientific_functions import Constant, ScientificFunction, ScientificProvider, ieee


logger = logging.getLogger(__name__)


class Operation(enum.Enum):
    """Operaciones binarias; el valor es la etiqueta del botón."""

    ADD = "+"
    SUBTRACT = "−"
    MULTIPLY = "×"
    DIVIDE = "÷"
    POWER = "xʸ"
    Y_ROOT = "ʸ√x"
    EE = "EE"


class EntryMode(enum.Enum):
    IDLE = "idle"
    ENTERING = "entering"
    EVALUATED = "evaluated"
    ERROR = "error"


@dataclasses.dataclass(frozen=True)
class DisplayState:
    """Instantánea de lo que la interfaz necesita para redibujarse."""

    display_text: str
    is_all_clear: bool
    active_operation: Operation | None
    is_second_function: bool
    use_radians: bool
    parentheses_depth: int
    memory: float


def _coerce(enum_cls, value):
    """Acepta un miembro del enum o su etiqueta; None si no existe."""
    try:
        return enum_cls(value)
    except ValueError:
        logger.warning("Valor ignorado para %s: %r", enum_cls.__name__, value)
        return None


def _action(method):
    """Registra la acción y notifica a los oyentes al terminar."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        logger.debug("%s%r %r", method.__name__, args, kwargs)
        method(self, *args, **kwargs)
        self._notify()

    return wrapper


class CalculatorEngine:
    """Máquina de estados de una calculadora estándar/científica."""

    MAX_INPUT_DIGITS = 9

    def __init__(self, use_radians: bool = False, rng: random.Random | None = None):
        self._provider = ScientificProvider(use_radians=use_radians, rng=rng)
        self._listeners = []

        self._display_text = "0"
        self._is_all_clear = True
        self._is_second_function = False
        self._memory = 0.0

        self._mode = EntryMode.IDLE
        self._accumulator = 0.0
        self._pending_operation: Operation | None = None
        self._last_operand = 0.0
        self._last_operation: Operation | None = None
        self._saved_contexts: list[tuple[float, Operation | None]] = []

    # ── Proyecciones de solo lectura ─────────────────────────────

    @property
    def display_text(self) -> str:
        return self._display_text

    @property
    def display_value(self) -> float:
        return parse_display(self._display_text)

    @property
    def is_all_clear(self) -> bool:
        return self._is_all_clear

    @property
    def active_operation(self) -> Operation | None:
        return self._pending_operation

    @property
    def pending_operation(self) -> Operation | None:
        return self._pending_operation

    @property
    def is_second_function(self) -> bool:
        return self._is_second_function

    @property
    def use_radians(self) -> bool:
        return self._provider.use_radians

    @property
    def angle_mode(self) -> str:
        return self._provider.angle_mode

    @property
    def memory(self) -> float:
        return self._memory

    @property
    def parentheses_depth(self) -> int:
        return len(self._saved_contexts)

    @property
    def mode(self) -> EntryMode:
        return self._mode

    @property
    def is_entering_number(self) -> bool:
        return self._mode is EntryMode.ENTERING

    @property
    def just_evaluated(self) -> bool:
        return self._mode is EntryMode.EVALUATED

    @property
    def is_error(self) -> bool:
        return self._mode is EntryMode.ERROR

    def snapshot(self) -> DisplayState:
        return DisplayState(
            display_text=self._display_text,
            is_all_clear=self._is_all_clear,
            active_operation=self._pending_operation,
            is_second_function=self._is_second_function,
            use_radians=self.use_radians,
            parentheses_depth=self.parentheses_depth,
            memory=self._memory,
        )

    # ── Oyentes ──────────────────────────────────────────────────

    def add_listener(self, callback):
        """Registra ``callback(DisplayState)``, invocado tras cada acción."""
        self._listeners.append(callback)

    def remove_listener(self, callback):
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self):
        if not self._listeners:
            return
        state = self.snapshot()
        for callback in list(self._listeners):
            callback(state)

    # ── Dígitos y punto decimal ──────────────────────────────────

    @_action
    def input_digit(self, digit: int):
        if type(digit) is not int or not 0 <= digit <= 9:
            logger.warning("Dígito ignorado: %r", digit)
            return
        if self.is_error:
            self._clear()

        if self.is_entering_number:
            if self._display_text == "0":
                self._display_text = str(digit)
            elif self._display_text == "-0":
                self._display_text = f"-{digit}"
            else:
                digits = self._display_text.replace(".", "").replace("-", "")
                if len(digits) < self.MAX_INPUT_DIGITS:
                    self._display_text += str(digit)
        else:
            self._display_text = str(digit)
        self._mode = EntryMode.ENTERING
        self._is_all_clear = False

    @_action
    def input_decimal(self):
        if self.is_error:
            self._clear()

        if not self.is_entering_number:
            self._display_text = "0."
            self._mode = EntryMode.ENTERING
        elif "." not in self._display_text:
            self._display_text += "."
        self._is_all_clear = False

    # ── Operaciones binarias ─────────────────────────────────────

    @_action
    def input_operation(self, operation):
        operation = _coerce(Operation, operation)
        if operation is None:
            return
        if self.is_error:
            self._clear()

        chain = self.is_entering_number or self.just_evaluated
        if chain and self._pending_operation is not None:
            self._perform_pending()
        else:
            self._accumulator = self.display_value
        self._pending_operation = operation
        if not self.is_error:
            self._mode = EntryMode.IDLE

    @_action
    def input_equals(self):
        if self.is_error:
            self._clear()
            return

        if self._pending_operation is not None:
            self._last_operation = self._pending_operation
            self._last_operand = self.display_value
            self._perform_pending()
        elif self._last_operation is not None:
            self._accumulator = self.display_value
            self._perform(self._last_operation, self._last_operand)
        self._pending_operation = None
        if not self.is_error:
            self._mode = EntryMode.EVALUATED

    # ── Borrado ──────────────────────────────────────────────────

    @_action
    def input_clear(self):
        self._clear()

    def _clear(self):
        if self._is_all_clear:
            self._accumulator = 0.0
            self._pending_operation = None
            self._last_operation = None
            self._last_operand = 0.0
            self._saved_contexts = []
        self._display_text = "0"
        self._mode = EntryMode.IDLE
        self._is_all_clear = True

    # ── Signo y porcentaje ───────────────────────────────────────

    @_action
    def input_negate(self):
        if self.is_error:
            return

        if not self.is_entering_number:
            if self._display_text == "0":
                self._display_text = "-0"
                self._mode = EntryMode.ENTERING
                self._is_all_clear = False
            else:
                self._show(-self.display_value)
            return

        # Cambio de signo sobre el texto que se está escribiendo
        if self._display_text.startswith("-"):
            self._display_text = self._display_text[1:]
        else:
            self._display_text = "-" + self._display_text

    @_action
    def input_percent(self):
        if self.is_error:
            return

        current = self.display_value
        if self._pending_operation in (Operation.ADD, Operation.SUBTRACT):
            value = self._accumulator * current / 100.0
        else:
            value = current / 100.0
        if self._show(value):
            self._mode = EntryMode.EVALUATED

    # ── Toggles ──────────────────────────────────────────────────

    @_action
    def toggle_second_function(self):
        self._is_second_function = not self._is_second_function

    @_action
    def toggle_rad_deg(self):
        self._provider.use_radians = not self._provider.use_radians

    # ── Memoria ──────────────────────────────────────────────────

    @_action
    def memory_clear(self):
        self._memory = 0.0

    @_action
    def memory_add(self):
        self._memory += self.display_value

    @_action
    def memory_subtract(self):
        self._memory -= self.display_value

    @_action
    def memory_recall(self):
        if self._show(self._memory):
            self._mode = EntryMode.EVALUATED

    # ── Paréntesis ───────────────────────────────────────────────

    @_action
    def input_open_parenthesis(self):
        if self.is_error:
            self._clear()

        self._saved_contexts.append((self._accumulator, self._pending_operation))
        self._accumulator = 0.0
        self._pending_operation = None
        self._mode = EntryMode.IDLE

    @_action
    def input_close_parenthesis(self):
        if not self._saved_contexts or self.is_error:
            return

        if self._pending_operation is not None:
            self._perform_pending()
            self._pending_operation = None
            if self.is_error:
                return

        sub_result = self.display_value
        self._accumulator, self._pending_operation = self._saved_contexts.pop()
        if self._show(sub_result):
            self._mode = EntryMode.EVALUATED
            self._is_all_clear = False

    # ── Funciones científicas y constantes ───────────────────────

    @_action
    def input_scientific_unary(self, function):
        function = _coerce(ScientificFunction, function)
        if function is None or self.is_error:
            return

        x = self.display_value
        if function is ScientificFunction.RECIPROCAL and x == 0:
            self._enter_error("recíproco de cero")
            return

        self._show_result(self._provider.apply(function, x))

    @_action
    def input_constant(self, name):
        constant = _coerce(Constant, name)
        if constant is None:
            return
        if self.is_error:
            self._clear()
        self._show_result(self._provider.constant(constant))

    # ── Cálculo interno ──────────────────────────────────────────

    def _perform_pending(self):
        if self._pending_operation is not None:
            self._perform(self._pending_operation, self.display_value)

    def _perform(self, operation: Operation, operand: float):
        acc = self._accumulator
        if operation is Operation.ADD:
            result = acc + operand
        elif operation is Operation.SUBTRACT:
            result = acc - operand
        elif operation is Operation.MULTIPLY:
            result = acc * operand
        elif operation is Operation.DIVIDE:
            if operand == 0:
                self._enter_error("división por cero")
                return
            result = acc / operand
        elif operation is Operation.POWER:
            result = _pow(acc, operand)
        elif operation is Operation.Y_ROOT:
            if operand == 0:
                self._enter_error("raíz de índice cero")
                return
            result = _pow(acc, 1.0 / operand)
        else:
            result = acc * _pow(10.0, operand)

        if self._show(result):
            self._accumulator = result

    def _show_result(self, value: float):
        if self._show(value):
            self._mode = EntryMode.EVALUATED
            self._is_all_clear = False

    def _show(self, value: float) -> bool:
        """Muestra ``value``; False si el resultado no es representable."""
        text = format_number(value)
        if text == ERROR_TEXT:
            self._enter_error(f"resultado no finito ({value!r})")
            return False
        self._display_text = text
        return True

    def _enter_error(self, reason: str):
        logger.info("Error de cálculo: %s", reason)
        self._display_text = ERROR_TEXT
        self._mode = EntryMode.ERROR
        self._pending_operation = None
        self._is_all_clear = True


_pow = ieee(math.pow)
