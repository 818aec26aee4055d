from typing import Callable

from termcolor import cprint, colored

from .console import read_choice

SEPARATOR = "-" * 9


# menu infrastructure
class MenuOption:
    """bind a menu number to a function"""
    def __init__(self, choice: int, label: str, function: Callable):
        self.choice = choice
        self.label = label
        self._fn = function

    def execute(self):
        return self._fn()


class NumberedMenu:
    """numbered menu: print the options, read a number, dispatch"""
    def __init__(self, title: str, options: list[MenuOption], exit_choice: int,
                 exit_label: str, on_exit: Callable | None = None, divider: str | None = None):
        self.title = title
        self.options = options
        self.exit_choice = exit_choice
        self.exit_label = exit_label
        self.on_exit = on_exit
        self.divider = divider

    def show(self):
        """print the title and every option"""
        cprint(self.title, "green", attrs=["bold"])
        print(SEPARATOR)
        for option in self.options:
            print(f"{colored(str(option.choice), 'blue')}. {option.label}")
        if self.divider:
            print(self.divider)
        print(f"{colored(str(self.exit_choice), 'blue')}. {self.exit_label}")

    def dispatch(self, choice: int) -> bool:
        """run the chosen action; false once the exit choice is taken"""
        if choice == self.exit_choice:
            if self.on_exit is not None:
                self.on_exit()
            return False
        option = next((o for o in self.options if o.choice == choice), None)
        if option is None:
            cprint("unrecognized choice!", "red")
            return True
        option.execute()
        return True

    def prompt(self) -> bool:
        """show, read one choice and dispatch it"""
        self.show()
        return self.dispatch(read_choice())

    def run(self):
        """loop until the exit choice"""
        while self.prompt():
            pass
