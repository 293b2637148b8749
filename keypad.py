"""Teclado de la calculadora: disposición de botones y enrutado de acciones.

Cada botón lleva una etiqueta de acción ("digit:7", "op:+", "fn:sin", ...)
que dispatch() traduce a la llamada correspondiente del motor. El módulo no
depende de tkinter, de modo que la interfaz, los atajos de teclado y el
script de regresión comparten la misma tabla.
"""

import logging
import re

from calculator_engine import CalculatorEngine, Operation
from scientific_functions import Constant, ScientificFunction


logger = logging.getLogger(__name__)


# ── Definiciones del teclado principal ────────────────────────
#  Cada fila es una lista de (texto, acción, tipo_color)
#  tipo_color: "num", "op", "func", "special", "equals"

KEYPAD = [
    [("(", "paren:(", "func"), (")", "paren:)", "func"),
     ("mc", "mc", "func"), ("m+", "m+", "func"),
     ("m-", "m-", "func"), ("mr", "mr", "func")],

    [("AC", "clear", "special"), ("±", "negate", "special"),
     ("%", "percent", "special"), ("÷", "op:÷", "op")],

    [("7", "digit:7", "num"), ("8", "digit:8", "num"),
     ("9", "digit:9", "num"), ("×", "op:×", "op")],

    [("4", "digit:4", "num"), ("5", "digit:5", "num"),
     ("6", "digit:6", "num"), ("−", "op:−", "op")],

    [("1", "digit:1", "num"), ("2", "digit:2", "num"),
     ("3", "digit:3", "num"), ("+", "op:+", "op")],

    [("0", "digit:0", "num"), (".", "decimal", "num"),
     ("=", "equals", "equals")],
]

# ── Definiciones de botones científicos ──────────────────────
#  (texto_normal, acción_normal, texto_2nd, acción_2nd)

SCIENCE_BUTTONS = [
    [("x²", "fn:x²", "x²", "fn:x²"),
     ("x³", "fn:x³", "x³", "fn:x³"),
     ("xʸ", "op:xʸ", "xʸ", "op:xʸ"),
     ("eˣ", "fn:eˣ", "eˣ", "fn:eˣ"),
     ("10ˣ", "fn:10ˣ", "2ˣ", "fn:2ˣ")],

    [("1/x", "fn:1/x", "1/x", "fn:1/x"),
     ("√x", "fn:√x", "√x", "fn:√x"),
     ("³√x", "fn:³√x", "³√x", "fn:³√x"),
     ("ʸ√x", "op:ʸ√x", "ʸ√x", "op:ʸ√x"),
     ("ln", "fn:ln", "ln", "fn:ln"),
     ("log₁₀", "fn:log₁₀", "log₂", "fn:log₂")],

    [("x!", "fn:x!", "x!", "fn:x!"),
     ("sin", "fn:sin", "sin⁻¹", "fn:sin⁻¹"),
     ("cos", "fn:cos", "cos⁻¹", "fn:cos⁻¹"),
     ("tan", "fn:tan", "tan⁻¹", "fn:tan⁻¹"),
     ("e", "const:e", "e", "const:e"),
     ("EE", "op:EE", "EE", "op:EE")],

    [("sinh", "fn:sinh", "sinh⁻¹", "fn:sinh⁻¹"),
     ("cosh", "fn:cosh", "cosh⁻¹", "fn:cosh⁻¹"),
     ("tanh", "fn:tanh", "tanh⁻¹", "fn:tanh⁻¹"),
     ("π", "const:π", "π", "const:π"),
     ("Rand", "const:Rand", "Rand", "const:Rand")],
]

# ── Atajos de teclado (keysym de tkinter o carácter) ─────────

KEYBOARD_SHORTCUTS = {
    **{str(d): f"digit:{d}" for d in range(10)},
    ".": "decimal",
    ",": "decimal",
    "+": "op:+",
    "-": "op:−",
    "*": "op:×",
    "/": "op:÷",
    "^": "op:xʸ",
    "%": "percent",
    "(": "paren:(",
    ")": "paren:)",
    "=": "equals",
    "Return": "equals",
    "KP_Enter": "equals",
    "Escape": "clear",
    "Delete": "clear",
    "!": "fn:x!",
}

# Alias usados al reproducir secuencias escritas a mano
_TOKEN_ALIASES = {
    "AC": "clear",
    "C": "clear",
    "±": "negate",
    "+/-": "negate",
    "×": "op:×",
    "÷": "op:÷",
    "−": "op:−",
    "2nd": "2nd",
    "Rad/Deg": "rad",
    "mc": "mc",
    "m+": "m+",
    "m-": "m-",
    "mr": "mr",
}

_NUMBER_RE = re.compile(r"^\d*\.?\d*$")


def dispatch(engine: CalculatorEngine, action: str):
    """Aplica ``action`` sobre ``engine``.

    Raises:
        ValueError: etiqueta de acción desconocida.
    """
    kind, _, arg = action.partition(":")

    if kind == "digit":
        engine.input_digit(int(arg))
    elif kind == "op":
        engine.input_operation(Operation(arg))
    elif kind == "fn":
        engine.input_scientific_unary(ScientificFunction(arg))
    elif kind == "const":
        engine.input_constant(Constant(arg))
    elif kind == "paren":
        if arg == "(":
            engine.input_open_parenthesis()
        elif arg == ")":
            engine.input_close_parenthesis()
        else:
            raise ValueError(f"Acción desconocida: {action}")
    elif action == "decimal":
        engine.input_decimal()
    elif action == "equals":
        engine.input_equals()
    elif action == "clear":
        engine.input_clear()
    elif action == "negate":
        engine.input_negate()
    elif action == "percent":
        engine.input_percent()
    elif action == "mc":
        engine.memory_clear()
    elif action == "m+":
        engine.memory_add()
    elif action == "m-":
        engine.memory_subtract()
    elif action == "mr":
        engine.memory_recall()
    elif action == "2nd":
        engine.toggle_second_function()
    elif action == "rad":
        engine.toggle_rad_deg()
    else:
        raise ValueError(f"Acción desconocida: {action}")


def actions_for_token(token: str) -> list[str]:
    """Traduce un token de una secuencia ("200", "+", "sin", "AC"...) a acciones."""
    if token and _NUMBER_RE.fullmatch(token):
        return ["decimal" if ch == "." else f"digit:{ch}" for ch in token]
    if token in _TOKEN_ALIASES:
        return [_TOKEN_ALIASES[token]]
    if token in KEYBOARD_SHORTCUTS:
        return [KEYBOARD_SHORTCUTS[token]]

    for prefix, enum_cls in (("op", Operation), ("fn", ScientificFunction), ("const", Constant)):
        try:
            member = enum_cls(token)
        except ValueError:
            continue
        return [f"{prefix}:{member.value}"]

    raise ValueError(f"Token desconocido: {token!r}")


def replay(engine: CalculatorEngine, sequence: str) -> list[str]:
    """Reproduce una secuencia separada por espacios; devuelve la pantalla tras cada token."""
    states = []
    for token in sequence.split():
        for action in actions_for_token(token):
            dispatch(engine, action)
        logger.debug("%s -> %s", token, engine.display_text)
        states.append(engine.display_text)
    return states
