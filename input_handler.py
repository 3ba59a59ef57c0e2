"""
Input Handler for PocketCalc
Maps keyboard keys to calculator engine calls
"""
from operations import Operation

KEY_OPERATIONS = {
    '+': Operation.ADD,
    '-': Operation.SUBTRACT,
    '*': Operation.MULTIPLY,
    '×': Operation.MULTIPLY,
    '/': Operation.DIVIDE,
    '÷': Operation.DIVIDE,
}

# Tk keysyms and other aliases
KEY_ALIASES = {
    'Return': 'Enter',
    'KP_Enter': 'Enter',
    '\r': 'Enter',
    '\n': 'Enter',
    'BackSpace': 'Backspace',
    '\x08': 'Backspace',
    '\x1b': 'Escape',
}


def normalize_key(key):
    """Return the canonical key name for a key or keysym"""
    return KEY_ALIASES.get(key, key)


def dispatch_key(engine, key):
    """Apply a key to the engine; returns False for unrecognised keys"""
    key = normalize_key(key)
    if len(key) == 1 and key in '0123456789.':
        engine.append_digit(key)
    elif key in KEY_OPERATIONS:
        engine.set_operation(KEY_OPERATIONS[key])
    elif key in ('Enter', '='):
        engine.evaluate()
    elif key == 'Escape':
        engine.clear()
    elif key == 'Backspace':
        engine.backspace()
    elif key == '%':
        engine.apply_percentage()
    else:
        return False
    return True
