"""Formato de números para la pantalla de la calculadora.

Todas las transiciones del motor que producen un valor numérico pasan por
format_number(); es la única fuente de verdad de lo que ve el usuario.
"""

import math


ERROR_TEXT = "Error"
SIGNIFICANT_DIGITS = 9
INTEGER_DISPLAY_LIMIT = 1e15


def format_number(value: float) -> str:
    """Devuelve la representación canónica de ``value``.

    NaN e infinitos se muestran como el token de error. Los enteros dentro
    de (-1e15, 1e15) se muestran sin punto decimal; el resto con 9 cifras
    significativas, sin ceros sobrantes a la derecha.
    """
    if math.isnan(value) or math.isinf(value):
        return ERROR_TEXT
    if value == 0:
        return "0"
    if value == int(value) and abs(value) < INTEGER_DISPLAY_LIMIT:
        return str(int(value))

    text = f"{value:.{SIGNIFICANT_DIGITS}g}"
    if "." in text and "e" not in text and "E" not in text:
        text = text.rstrip("0").rstrip(".")
    return text


def parse_display(text: str) -> float:
    """Valor numérico del texto de pantalla; lo no numérico vale 0."""
    if text == ERROR_TEXT:
        return 0.0
    try:
        return float(text)
    except ValueError:
        return 0.0
