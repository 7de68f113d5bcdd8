"""
Interfaz gráfica de la calculadora estándar y científica.

Usa tkinter. Toda la lógica vive en CalculatorEngine: la ventana solo
traduce botones y teclas en eventos del motor y muestra sus textos.
"""

import tkinter as tk
from tkinter import font as tkfont
from tkinter import messagebox

from calculator_engine import CalculatorEngine, Notification, NotificationKind
from operations import TrigFunction, UtilityFunction


class CalculatorApp:
    """Ventana principal con páginas estándar y científica."""

    # ── Paleta de colores ────────────────────────────────────────
    C = {
        "bg":         "#1E1E2E",
        "display_bg": "#181825",
        "num":        "#313244",
        "num_fg":     "#CDD6F4",
        "op":         "#F38BA8",
        "op_fg":      "#1E1E2E",
        "func":       "#45475A",
        "func_fg":    "#CDD6F4",
        "special":    "#585B70",
        "special_fg": "#CDD6F4",
        "equals":     "#89B4FA",
        "equals_fg":  "#1E1E2E",
        "toggle_on":  "#A6E3A1",
        "toggle_off": "#585B70",
        "expr_fg":    "#BAC2DE",
        "result_fg":  "#A6E3A1",
    }

    # ── Definiciones del teclado principal ────────────────────────
    #  Cada fila es una lista de (texto, acción, tipo_color)

    KEYPAD = [
        [("%",   "percent",   "func"), ("C", "clear", "special"),
         ("⌫",   "backspace", "special")],

        [("1/x", "unary:1/x", "func"), ("x²", "unary:x²", "func"),
         ("√",   "unary:√",   "func"), ("÷", "op:÷", "op")],

        [("7",  "digit:7",  "num"), ("8", "digit:8", "num"),
         ("9",  "digit:9",  "num"), ("×", "op:×", "op")],

        [("4",  "digit:4",  "num"), ("5", "digit:5", "num"),
         ("6",  "digit:6",  "num"), ("−", "op:−", "op")],

        [("1",  "digit:1",  "num"), ("2", "digit:2", "num"),
         ("3",  "digit:3",  "num"), ("+", "op:+", "op")],

        [("±", "sign", "func"), ("0", "digit:0", "num"),
         (",",  "digit:,",  "num"), ("=", "equals", "equals")],
    ]

    MEMORY_KEYS = ["MC", "MR", "M+", "M-", "MS", "M↓"]

    # ── Panel científico ─────────────────────────────────────────
    #  (texto, acción); la tecla 2nd alterna la primera fila

    SCIENCE_KEYPAD = [
        [("x²", "unary:x²"), ("√", "unary:√"),
         ("xʸ", "op:xʸ"), ("10^x", "unary:10^x"),
         ("log", "unary:log"), ("ln", "unary:ln")],

        [("π", "unary:π"), ("e", "unary:e"), ("n!", "unary:n!"),
         ("|x|", "unary:|x|"), ("mod", "op:mod"), ("exp", "unary:exp")],
    ]

    SECOND_FUNCTIONS = {
        "x²":   ("x³", "unary:x³"),
        "√":    ("³√x", "unary:³√x"),
        "xʸ":   ("ʸ√x", "op:ʸ√x"),
        "10^x": ("2^x", "unary:2^x"),
        "log":  ("logy(x)", "op:logy(x)"),
        "ln":   ("e^x", "unary:e^x"),
    }

    KEY_OPERATORS = {"+": "+", "-": "−", "*": "×", "/": "÷"}

    # ────────────────────────────────────────────────────────────

    def __init__(self, root: tk.Tk, engine=None, scientific: bool = False):
        self.root = root
        self.root.title("Calculadora")
        self.root.configure(bg=self.C["bg"])

        self.engine = engine if engine is not None else CalculatorEngine()
        self.engine.add_listener(self._on_notification)
        self._scientific = False
        self._second_mode = False

        self._init_fonts()
        self._create_display()
        self._create_toggle_bar()
        self._create_memory_row()
        self._create_science_panel()
        self._create_keypad()
        self._bind_keyboard()

        if scientific:
            self._toggle_page()
        self._refresh()

    # ── Fuentes ──────────────────────────────────────────────────

    def _init_fonts(self):
        self._f_expr   = tkfont.Font(family="Consolas", size=14)
        self._f_result = tkfont.Font(family="Consolas", size=26, weight="bold")
        self._f_btn    = tkfont.Font(family="Segoe UI", size=15)
        self._f_func   = tkfont.Font(family="Segoe UI", size=12)
        self._f_small  = tkfont.Font(family="Segoe UI", size=11)

    # ── Pantalla ─────────────────────────────────────────────────

    def _create_display(self):
        frame = tk.Frame(self.root, bg=self.C["display_bg"], padx=12, pady=8)
        frame.pack(fill="x", padx=6, pady=(6, 2))

        # Traza de la última operación
        self.expr_var = tk.StringVar()
        tk.Label(
            frame, textvariable=self.expr_var, anchor="e",
            font=self._f_expr, bg=self.C["display_bg"], fg=self.C["expr_fg"],
        ).pack(fill="x", pady=(4, 0))

        self.result_var = tk.StringVar(value="0")
        tk.Entry(
            frame, textvariable=self.result_var, state="readonly",
            font=self._f_result, fg=self.C["result_fg"],
            readonlybackground=self.C["display_bg"],
            relief="flat", justify="right", bd=0,
        ).pack(fill="x", pady=(2, 4))

    # ── Barra de toggles (página · DEG/RAD/GRAD · 2nd) ───────────

    def _create_toggle_bar(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="x", padx=6, pady=(2, 2))

        self.page_btn = tk.Button(
            frame, text="Científica", font=self._f_small, width=10,
            bg=self.C["toggle_off"], fg=self.C["special_fg"],
            activebackground=self.C["toggle_off"], relief="flat",
            command=self._toggle_page,
        )
        self.page_btn.pack(side="left", padx=(0, 4))

        self.angle_btn = tk.Button(
            frame, text=self.engine.angle_mode.label, font=self._f_small,
            width=6, bg=self.C["toggle_on"], fg=self.C["bg"],
            activebackground=self.C["toggle_on"], relief="flat",
            command=self._toggle_angle,
        )

        self.second_btn = tk.Button(
            frame, text="2nd", font=self._f_small, width=6,
            bg=self.C["toggle_off"], fg=self.C["special_fg"],
            activebackground=self.C["toggle_off"], relief="flat",
            command=self._toggle_second,
        )

    # ── Fila de memoria ──────────────────────────────────────────

    def _create_memory_row(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="x", padx=6, pady=2)
        for col, label in enumerate(self.MEMORY_KEYS):
            frame.columnconfigure(col, weight=1, uniform="mem")
            tk.Button(
                frame, text=label, font=self._f_small,
                bg=self.C["bg"], fg=self.C["func_fg"],
                activebackground=self.C["special"], relief="flat",
                command=lambda op=label: self._on_key(f"mem:{op}"),
            ).grid(row=0, column=col, sticky="nsew", padx=1, pady=1)

    # ── Panel de funciones científicas ───────────────────────────

    def _create_science_panel(self):
        self.science_frame = tk.Frame(self.root, bg=self.C["bg"])
        for col in range(6):
            self.science_frame.columnconfigure(col, weight=1, uniform="sci")

        # (botón, (texto, acción) normal)
        self._second_buttons: list[tuple[tk.Button, tuple[str, str]]] = []

        for r, row_def in enumerate(self.SCIENCE_KEYPAD):
            for col, (text, action) in enumerate(row_def):
                btn = tk.Button(
                    self.science_frame, text=text, font=self._f_func,
                    bg=self.C["func"], fg=self.C["func_fg"],
                    activebackground=self.C["special"], relief="flat",
                    command=lambda a=action: self._on_key(a),
                )
                btn.grid(row=r, column=col, sticky="nsew", padx=2, pady=2,
                         ipady=6)
                if text in self.SECOND_FUNCTIONS:
                    self._second_buttons.append((btn, (text, action)))

        pickers = tk.Frame(self.science_frame, bg=self.C["bg"])
        pickers.grid(row=len(self.SCIENCE_KEYPAD), column=0, columnspan=6,
                     sticky="nsew", pady=(2, 0))

        self.trig_var = tk.StringVar(value="Trigonometría")
        trig_menu = tk.OptionMenu(pickers, self.trig_var,
                                  *[f.label for f in TrigFunction],
                                  command=self._on_trig)
        self.func_var = tk.StringVar(value="Función")
        func_menu = tk.OptionMenu(pickers, self.func_var,
                                  *[f.label for f in UtilityFunction],
                                  command=self._on_function)
        for menu in (trig_menu, func_menu):
            menu.config(font=self._f_small, bg=self.C["func"],
                        fg=self.C["func_fg"], relief="flat",
                        highlightthickness=0)
            menu.pack(side="left", fill="x", expand=True, padx=2)

    # ── Teclado numérico / operadores ────────────────────────────

    def _create_keypad(self):
        self.keypad_frame = frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="both", expand=True, padx=6, pady=(2, 6))

        max_cols = max(len(row) for row in self.KEYPAD)
        for c in range(max_cols):
            frame.columnconfigure(c, weight=1, uniform="key")

        for r, row_def in enumerate(self.KEYPAD):
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
                if action == "clear":
                    self.clear_btn = btn
                col_pos += spans[idx]

        for r in range(len(self.KEYPAD)):
            frame.rowconfigure(r, weight=1)

    @staticmethod
    def _compute_spans(cols_in_row: int, max_cols: int) -> list[int]:
        """Reparte max_cols entre cols_in_row botones."""
        base, extra = divmod(max_cols, cols_in_row)
        spans = [base] * cols_in_row
        spans[-1] += extra
        return spans

    # ── Atajos de teclado ────────────────────────────────────────

    def _bind_keyboard(self):
        self.root.bind("<Key>", self._on_keypress)
        self.root.bind("<Return>", lambda _e: self._on_key("equals"))
        self.root.bind("<KP_Enter>", lambda _e: self._on_key("equals"))
        self.root.bind("<Escape>", lambda _e: self._on_key("clear_all"))
        self.root.bind("<BackSpace>", lambda _e: self._on_key("backspace"))

    def _on_keypress(self, event):
        char = event.char
        if char and char in "0123456789,.":
            self._on_key(f"digit:{char}")
        elif char in self.KEY_OPERATORS:
            self._on_key(f"op:{self.KEY_OPERATORS[char]}")
        elif char == "%":
            self._on_key("percent")

    # ── Acciones ─────────────────────────────────────────────────

    def _on_key(self, action: str):
        kind, _, arg = action.partition(":")
        engine = self.engine
        if kind == "digit":
            engine.enter_digit(arg)
        elif kind == "op":
            engine.enter_operator(arg)
        elif kind == "unary":
            engine.apply_unary(arg)
        elif kind == "mem":
            engine.memory_op(arg)
        elif action == "equals":
            engine.equals()
        elif action == "percent":
            engine.percentage()
        elif action == "sign":
            engine.toggle_sign()
        elif action == "backspace":
            engine.backspace()
        elif action == "clear":
            if self.clear_btn.cget("text") == "CE":
                engine.clear_entry()
            else:
                engine.clear_all()
        elif action == "clear_all":
            engine.clear_all()
        self._refresh()

    def _on_trig(self, name: str):
        self.engine.apply_trig(name)
        self.trig_var.set("Trigonometría")
        self._refresh()

    def _on_function(self, name: str):
        self.engine.apply_function(name)
        self.func_var.set("Función")
        self._refresh()

    def _on_notification(self, notification: Notification):
        if notification.kind is NotificationKind.MEMORY_EMPTY:
            messagebox.showwarning(notification.title, notification.message,
                                   parent=self.root)
        else:
            messagebox.showinfo(notification.title, notification.message,
                                parent=self.root)

    def _refresh(self):
        display = self.engine.display
        self.result_var.set(display)
        self.expr_var.set(self.engine.operation)
        self.clear_btn.config(text="C" if display in ("0", "") else "CE")

    # ── Toggles ──────────────────────────────────────────────────

    def _toggle_page(self):
        self._scientific = not self._scientific
        if self._scientific:
            self.science_frame.pack(fill="x", padx=6, pady=2,
                                    before=self.keypad_frame)
            self.angle_btn.pack(side="left", padx=(0, 4))
            self.second_btn.pack(side="left")
            self.page_btn.config(text="Estándar")
        else:
            self.science_frame.pack_forget()
            self.angle_btn.pack_forget()
            self.second_btn.pack_forget()
            self.page_btn.config(text="Científica")

    def _toggle_angle(self):
        self.angle_btn.config(text=self.engine.toggle_angle_mode())

    def _toggle_second(self):
        self._second_mode = not self._second_mode
        for btn, (text, action) in self._second_buttons:
            if self._second_mode:
                text, action = self.SECOND_FUNCTIONS[text]
            btn.config(text=text, command=lambda a=action: self._on_key(a))

        if self._second_mode:
            self.second_btn.config(bg=self.C["toggle_on"], fg=self.C["bg"])
        else:
            self.second_btn.config(bg=self.C["toggle_off"],
                                   fg=self.C["special_fg"])
