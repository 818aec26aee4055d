import functools
import logging
from decimal import Decimal, InvalidOperation
from typing import Callable

from termcolor import cprint, colored

logger = logging.getLogger(__name__)

ITEM_LINE_FILL = "-" * 24


class ActionAborted(Exception):
    """raised inside a menu action to abandon it with a message"""


# helpers
def safe_int(value: str, minimum: int | None = None):
    """return int value or none if invalid / below minimum"""
    try:
        v = int(value)
        if minimum is not None and v < minimum:
            return None
        return v
    except ValueError:
        return None

def safe_decimal(value: str, minimum: Decimal | None = None):
    """return decimal value or none if invalid / below minimum"""
    try:
        v = Decimal(value.strip())
    except InvalidOperation:
        return None
    if not v.is_finite() or (minimum is not None and v < minimum):
        return None
    return v

def color_money(amount) -> str:
    """format amount as green money string"""
    return colored(f"${Decimal(amount):.2f}", "green")

def ask(prompt: str) -> str:
    """prompt for a free text value"""
    return input(colored(prompt, "magenta")).strip()

def read_choice(prompt: str = "please make your choice: ") -> int:
    """keep prompting until an integer is entered"""
    while True:
        choice = safe_int(input(colored(prompt, "magenta")).strip())
        if choice is not None:
            return choice
        cprint("your input is invalid!", "red")

def print_item_line(name: str, price: str):
    print(f"{name}{ITEM_LINE_FILL}{color_money(price)}")

def heading(text: str):
    cprint(f"[---{text}---]", "green", attrs=["bold"])


def guarded(fn: Callable):
    """run a menu action; report any failure and fall back to the menu loop"""
    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except EOFError:
            raise
        except ActionAborted as e:
            cprint(str(e), "red")
        except Exception as e:
            logger.debug("action %s failed", fn.__qualname__, exc_info=True)
            cprint(f"failed: {e}", "red")
        return None
    return wrapper
