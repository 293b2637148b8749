"""
Interfaz gráfica de la calculadora científica.

Usa tkinter. La ventana no contiene lógica de cálculo: cada botón envía su
acción al motor mediante keypad.dispatch() y la pantalla se redibuja desde
el DisplayState que el motor entrega a sus oyentes.
"""

import tkinter as tk
from tkinter import font as tkfont

from calculator_engine import CalculatorEngine, DisplayState
from keypad import KEYBOARD_SHORTCUTS, KEYPAD, SCIENCE_BUTTONS, dispatch


class CalculatorApp:
    """Ventana principal de la calculadora científica."""

    # ── Paleta de colores ────────────────────────────────────────
    C = {
        "bg":         "#1E1E2E",
        "display_bg": "#181825",
        "num":        "#313244",
        "num_fg":     "#CDD6F4",
        "op":         "#F38BA8",
        "op_fg":      "#1E1E2E",
        "op_active":  "#F5E0DC",
        "func":       "#45475A",
        "func_fg":    "#CDD6F4",
        "special":    "#585B70",
        "special_fg": "#CDD6F4",
        "equals":     "#89B4FA",
        "equals_fg":  "#1E1E2E",
        "toggle_on":  "#A6E3A1",
        "toggle_off": "#585B70",
        "status_fg":  "#BAC2DE",
        "result_fg":  "#A6E3A1",
    }

    # ────────────────────────────────────────────────────────────

    def __init__(self, root: tk.Tk, engine=None):
        self.root = root
        self.root.title("Calculadora Científica")
        self.root.configure(bg=self.C["bg"])
        self.root.resizable(False, False)

        self.engine = engine if engine is not None else CalculatorEngine()
        self._op_buttons: dict[str, tk.Button] = {}
        self._sci_buttons: list[tuple[tk.Button, tuple]] = []
        self._clear_btn = None

        self._init_fonts()
        self._create_display()
        self._create_toggle_bar()
        self._create_science_panel()
        self._create_keypad()
        self._bind_keyboard()

        self.engine.add_listener(self._render)
        self._render(self.engine.snapshot())

    # ── Fuentes ──────────────────────────────────────────────────

    def _init_fonts(self):
        self._f_result = tkfont.Font(family="Consolas", size=26, weight="bold")
        self._f_btn    = tkfont.Font(family="Segoe UI", size=15)
        self._f_func   = tkfont.Font(family="Segoe UI", size=12)
        self._f_small  = tkfont.Font(family="Segoe UI", size=11)

    # ── Pantalla ─────────────────────────────────────────────────

    def _create_display(self):
        frame = tk.Frame(self.root, bg=self.C["display_bg"], padx=12, pady=8)
        frame.pack(fill="x", padx=6, pady=(6, 2))

        # Indicadores: memoria y profundidad de paréntesis
        self.status_var = tk.StringVar()
        tk.Label(
            frame, textvariable=self.status_var, font=self._f_small,
            bg=self.C["display_bg"], fg=self.C["status_fg"], anchor="w",
        ).pack(fill="x")

        # Fila del resultado + botón copiar
        row = tk.Frame(frame, bg=self.C["display_bg"])
        row.pack(fill="x", pady=(2, 4))

        tk.Button(
            row, text="Copiar", font=self._f_small,
            bg=self.C["func"], fg=self.C["func_fg"],
            activebackground=self.C["special"], relief="flat",
            cursor="hand2", command=self._copy_result, padx=8,
        ).pack(side="right", padx=(6, 0))

        self.display_var = tk.StringVar(value="0")
        tk.Label(
            row, textvariable=self.display_var, font=self._f_result,
            bg=self.C["display_bg"], fg=self.C["result_fg"], anchor="e",
        ).pack(side="right", fill="x", expand=True)

    # ── Barra de toggles (RAD/DEG · 2nd) ────────────────────────

    def _create_toggle_bar(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="x", padx=6, pady=(2, 2))

        self.angle_btn = tk.Button(
            frame, text="DEG", font=self._f_small, width=6,
            bg=self.C["op"], fg=self.C["op_fg"], relief="flat",
            command=lambda: self._on_key("rad"),
        )
        self.angle_btn.pack(side="left", padx=(0, 4))

        self.second_btn = tk.Button(
            frame, text="2nd", font=self._f_small, width=6,
            bg=self.C["toggle_off"], fg=self.C["special_fg"], relief="flat",
            command=lambda: self._on_key("2nd"),
        )
        self.second_btn.pack(side="left")

    # ── Panel de funciones científicas ───────────────────────────

    def _create_science_panel(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="x", padx=6, pady=2)

        max_cols = max(len(row) for row in SCIENCE_BUTTONS)
        for col in range(max_cols):
            frame.columnconfigure(col, weight=1, uniform="sci")

        for r, row_def in enumerate(SCIENCE_BUTTONS):
            spans = self._compute_spans(len(row_def), max_cols)
            col_pos = 0
            for idx, spec in enumerate(row_def):
                btn = tk.Button(
                    frame, text=spec[0], font=self._f_func,
                    bg=self.C["func"], fg=self.C["func_fg"],
                    activebackground=self.C["special"], relief="flat",
                    command=lambda s=spec: self._on_science(s),
                )
                btn.grid(row=r, column=col_pos, columnspan=spans[idx],
                         sticky="nsew", padx=2, pady=2, ipady=6)
                col_pos += spans[idx]
                self._sci_buttons.append((btn, spec))
                if spec[1].startswith("op:"):
                    self._op_buttons[spec[1]] = btn

    # ── Teclado numérico / operadores ────────────────────────────

    def _create_keypad(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="both", expand=True, padx=6, pady=(2, 6))

        # Determinar el ancho máximo de las filas
        max_cols = max(len(row) for row in KEYPAD)
        for c in range(max_cols):
            frame.columnconfigure(c, weight=1, uniform="key")

        for r, row_def in enumerate(KEYPAD):
            # Repartir columnas con colspan para filas cortas
            spans = self._compute_spans(len(row_def), max_cols)
            col_pos = 0
            for idx, (text, action, kind) in enumerate(row_def):
                btn = tk.Button(
                    frame, text=text, font=self._f_btn,
                    bg=self.C[kind], fg=self.C[f"{kind}_fg"],
                    activebackground=self.C["special"], relief="flat",
                    command=lambda a=action: self._on_key(a),
                )
                btn.grid(row=r, column=col_pos, columnspan=spans[idx],
                         sticky="nsew", padx=2, pady=2, ipady=8)
                col_pos += spans[idx]
                if action.startswith("op:"):
                    self._op_buttons[action] = btn
                elif action == "clear":
                    self._clear_btn = btn

        for r in range(len(KEYPAD)):
            frame.rowconfigure(r, weight=1)

    @staticmethod
    def _compute_spans(cols_in_row: int, max_cols: int) -> list[int]:
        """Reparte max_cols entre cols_in_row botones."""
        base, extra = divmod(max_cols, cols_in_row)
        spans = [base] * cols_in_row
        # Asignar columnas extra al último botón (generalmente '=')
        spans[-1] += extra
        return spans

    # ── Atajos de teclado ────────────────────────────────────────

    def _bind_keyboard(self):
        self.root.bind("<Key>", self._on_keypress)

    def _on_keypress(self, event):
        action = KEYBOARD_SHORTCUTS.get(event.char) or KEYBOARD_SHORTCUTS.get(event.keysym)
        if action is not None:
            self._on_key(action)

    # ── Acciones ─────────────────────────────────────────────────

    def _on_key(self, action: str):
        dispatch(self.engine, action)

    def _on_science(self, spec: tuple):
        action = spec[3] if self.engine.is_second_function else spec[1]
        dispatch(self.engine, action)

    # ── Redibujado ───────────────────────────────────────────────

    def _render(self, state: DisplayState):
        self.display_var.set(state.display_text)

        status = []
        if state.memory != 0:
            status.append("M")
        if state.parentheses_depth:
            status.append("(" * state.parentheses_depth)
        self.status_var.set("  ".join(status))

        if self._clear_btn is not None:
            self._clear_btn.config(text="AC" if state.is_all_clear else "C")

        active = f"op:{state.active_operation.value}" if state.active_operation else None
        for action, btn in self._op_buttons.items():
            if action == active:
                btn.config(bg=self.C["op_active"], fg=self.C["op_fg"])
            elif action in ("op:xʸ", "op:ʸ√x", "op:EE"):
                btn.config(bg=self.C["func"], fg=self.C["func_fg"])
            else:
                btn.config(bg=self.C["op"], fg=self.C["op_fg"])

        if state.use_radians:
            self.angle_btn.config(text="RAD", bg=self.C["toggle_on"], fg=self.C["bg"])
        else:
            self.angle_btn.config(text="DEG", bg=self.C["op"], fg=self.C["op_fg"])

        if state.is_second_function:
            self.second_btn.config(bg=self.C["toggle_on"], fg=self.C["bg"])
        else:
            self.second_btn.config(bg=self.C["toggle_off"], fg=self.C["special_fg"])
        for btn, spec in self._sci_buttons:
            btn.config(text=spec[2] if state.is_second_function else spec[0])

    # ── Copiar resultado ─────────────────────────────────────────

    def _copy_result(self):
        self.root.clipboard_clear()
        self.root.clipboard_append(self.engine.display_text)
