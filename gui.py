"""
GUI for PocketCalc
Tkinter interface: display, keypad, history panel and theme toggle
"""
import logging
import tkinter as tk
import config
from calculator import CalculatorEngine
from database import Database
from input_handler import dispatch_key
from operations import Operation
from storage_manager import StorageManager

logger = logging.getLogger(__name__)

# Keypad layout: (label, kind)
KEYPAD = [
    [("C", "danger"), ("⌫", "mode"), ("%", "operator"), ("÷", "operator")],
    [("7", "normal"), ("8", "normal"), ("9", "normal"), ("×", "operator")],
    [("4", "normal"), ("5", "normal"), ("6", "normal"), ("-", "operator")],
    [("1", "normal"), ("2", "normal"), ("3", "normal"), ("+", "operator")],
    [("√", "operator"), ("0", "normal"), (".", "normal"), ("=", "equals")],
]

BUTTON_OPERATIONS = {
    "+": Operation.ADD,
    "-": Operation.SUBTRACT,
    "×": Operation.MULTIPLY,
    "÷": Operation.DIVIDE,
}


class DisplayPanel:
    """Display sink: renders the current value or error"""

    def __init__(self, gui):
        self.gui = gui

    def render(self, text, is_error):
        T = self.gui.T
        self.gui.display.config(text=text, fg=T["danger"] if is_error else T["display_fg"])
        self.gui.expression_label.config(text=self.gui.engine.expression_text)
        self.gui.update_undo_buttons()


class HistoryPanel:
    """History sink: renders formatted entries, most recent first"""

    def __init__(self, gui):
        self.gui = gui

    def render(self, entries):
        listbox = self.gui.history_list
        listbox.delete(0, tk.END)
        for item in entries:
            listbox.insert(tk.END, item)
        self.gui.schedule_history_save()


class PocketCalcGUI:
    def __init__(self, root, db=None):
        self.root = root
        self.root.title(config.APP_NAME)
        self.root.geometry(f"{config.WINDOW_WIDTH}x{config.WINDOW_HEIGHT}")

        # Initialize components
        self.db = db or Database()
        self.storage = StorageManager(self.db)
        self._save_pending = False

        # Theme state (load before any widget is created)
        self.dark_mode = self.storage.get_theme() == "dark"
        self.T = config.get_theme(self.dark_mode)
        self.root.configure(bg=self.T["bg"])

        self.create_widgets()

        self.engine = CalculatorEngine(
            history=self.storage.load_history(),
            display=DisplayPanel(self),
            history_view=HistoryPanel(self),
        )
        self.engine.display.render(self.engine.display_text, self.engine.is_error)

        self.root.bind('<Key>', self.on_key_press)

    # ── Persistence ─────────────────────────────────────────────────────
    def schedule_history_save(self):
        """Save history once the event loop is idle, so input is never blocked"""
        if self._save_pending or not hasattr(self, 'engine'):
            return
        self._save_pending = True
        self.root.after_idle(self._save_history)

    def _save_history(self):
        self._save_pending = False
        if not self.storage.save_history(self.engine.history_snapshot()):
            logger.warning("History not saved; keeping in-memory copy")

    # ── Theme ───────────────────────────────────────────────────────────
    def apply_theme(self):
        """Refresh T, then destroy and rebuild all widgets."""
        self.T = config.get_theme(self.dark_mode)
        self.root.configure(bg=self.T["bg"])
        for w in self.root.winfo_children():
            w.destroy()
        self.create_widgets()
        self.engine.display.render(self.engine.display_text, self.engine.is_error)
        self.engine.history_view.render(self.engine.history.format_calculation_history())

    def toggle_theme(self):
        """Toggle between light and dark mode and persist the choice"""
        theme = self.storage.toggle_theme()
        self.dark_mode = theme == "dark"
        self.apply_theme()

    # ── Widgets ─────────────────────────────────────────────────────────
    def _neu_btn(self, parent, text, command=None, kind="normal", **kw):
        """Create a flat styled button."""
        T = self.T
        if kind == "equals":
            bg, fg, abg = T["equals_bg"], T["equals_fg"], T["accent"]
        elif kind == "operator":
            bg, fg, abg = T["btn_bg"], T["operator_fg"], T["bg_dark"]
        elif kind == "mode":
            bg, fg, abg = T["mode_bg"], T["mode_fg"], T["shadow_dark"]
        elif kind == "danger":
            bg, fg, abg = T["danger"], "#FFFFFF", T["bg_dark"]
        else:
            bg, fg, abg = T["btn_bg"], T["btn_fg"], T["bg_dark"]
        return tk.Button(
            parent, text=text, command=command,
            font=kw.pop("font", config.BUTTON_FONT),
            bg=bg, fg=fg,
            activebackground=abg, activeforeground=fg,
            relief=tk.FLAT, bd=0, cursor="hand2",
            highlightthickness=1,
            highlightbackground=T["shadow_dark"],
            **kw
        )

    def create_widgets(self):
        """Create main UI components"""
        T = self.T

        # Top bar
        top = tk.Frame(self.root, bg=T["bg_dark"])
        top.pack(fill=tk.X, padx=2, pady=2)
        tk.Label(top, text=config.APP_NAME, font=(config.BUTTON_FONT[0], 14, "bold"),
                 bg=T["bg_dark"], fg=T["accent"]).pack(side=tk.LEFT, padx=6)
        self._neu_btn(top, "☾" if not self.dark_mode else "☀", self.toggle_theme,
                      kind="mode", font=config.LABEL_FONT, width=3).pack(side=tk.RIGHT, padx=2)
        self.redo_btn = self._neu_btn(top, "Redo", lambda: self.engine.redo(),
                                      kind="mode", font=config.LABEL_FONT)
        self.redo_btn.pack(side=tk.RIGHT, padx=2)
        self.undo_btn = self._neu_btn(top, "Undo", lambda: self.engine.undo(),
                                      kind="mode", font=config.LABEL_FONT)
        self.undo_btn.pack(side=tk.RIGHT, padx=2)

        # Display area
        display_frame = tk.Frame(self.root, bg=T["display_bg"])
        display_frame.pack(fill=tk.X, padx=6, pady=(4, 6))
        self.expression_label = tk.Label(
            display_frame, text="", font=config.EXPRESSION_FONT,
            bg=T["display_bg"], fg=T["subtext"], anchor=tk.E, padx=12
        )
        self.expression_label.pack(side=tk.TOP, fill=tk.X)
        self.display = tk.Label(
            display_frame, text=config.INITIAL_DISPLAY, font=config.DISPLAY_FONT,
            bg=T["display_bg"], fg=T["display_fg"], anchor=tk.E, padx=12, pady=2
        )
        self.display.pack(side=tk.TOP, fill=tk.X)

        # Keypad
        keypad = tk.Frame(self.root, bg=T["bg"])
        keypad.pack(fill=tk.BOTH, expand=True, padx=5, pady=3)
        for r, row in enumerate(KEYPAD):
            keypad.rowconfigure(r, weight=1)
            for c, (label, kind) in enumerate(row):
                keypad.columnconfigure(c, weight=1)
                self._neu_btn(keypad, label, lambda b=label: self.calculator_button_click(b),
                              kind=kind).grid(row=r, column=c, sticky="nsew", padx=2, pady=2)

        # History panel
        history_frame = tk.Frame(self.root, bg=T["bg"])
        history_frame.pack(fill=tk.BOTH, padx=5, pady=(0, 5))
        header = tk.Frame(history_frame, bg=T["bg"])
        header.pack(fill=tk.X)
        tk.Label(header, text="History", font=(config.LABEL_FONT[0], 11, "bold"),
                 bg=T["bg"], fg=T["text"]).pack(side=tk.LEFT)
        self._neu_btn(header, "Clear History", lambda: self.clear_history(),
                      kind="mode", font=config.LABEL_FONT).pack(side=tk.RIGHT)
        self.history_list = tk.Listbox(
            history_frame, height=5, font=config.LABEL_FONT,
            bg=T["listbox_bg"], fg=T["listbox_fg"], relief=tk.FLAT,
            highlightthickness=0, activestyle="none"
        )
        self.history_list.pack(fill=tk.BOTH, expand=True)
        self.history_list.bind('<<ListboxSelect>>', self.on_history_select)

    def update_undo_buttons(self):
        self.undo_btn.config(state=tk.NORMAL if self.engine.can_undo else tk.DISABLED)
        self.redo_btn.config(state=tk.NORMAL if self.engine.can_redo else tk.DISABLED)

    # ── Input ───────────────────────────────────────────────────────────
    def calculator_button_click(self, button):
        """Handle calculator button clicks"""
        if button in '0123456789.':
            self.engine.append_digit(button)
        elif button in BUTTON_OPERATIONS:
            self.engine.set_operation(BUTTON_OPERATIONS[button])
        elif button == '=':
            self.engine.evaluate()
        elif button == 'C':
            self.engine.clear()
        elif button == '⌫':
            self.engine.backspace()
        elif button == '%':
            self.engine.apply_percentage()
        elif button == '√':
            self.engine.apply_square_root()

    def on_key_press(self, event):
        """Handle keyboard input"""
        key = event.char if event.char and event.char.isprintable() else event.keysym
        dispatch_key(self.engine, key)

    def on_history_select(self, event):
        selection = self.history_list.curselection()
        if selection:
            self.engine.recall_from_history(selection[0])

    def clear_history(self):
        self.engine.clear_history()
        self.storage.clear_history()
