"""Punto de entrada de la calculadora científica."""

import logging
import tkinter as tk

from calculator_engine import CalculatorEngine
from calculator_ui import CalculatorApp


WINDOW_GEOMETRY = "460x640"
WINDOW_MIN_SIZE = (420, 600)
START_IN_RADIANS = False
LOG_LEVEL = "WARNING"


def main():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    root = tk.Tk()
    root.geometry(WINDOW_GEOMETRY)
    root.minsize(*WINDOW_MIN_SIZE)
    engine = CalculatorEngine(use_radians=START_IN_RADIANS)
    CalculatorApp(root, engine=engine)
    root.mainloop()


if __name__ == "__main__":
    main()
