import logging
import signal
import sys

from termcolor import cprint
from colorama import just_fix_windows_console as enable_windows_ansi_interpretation

from .accounts import AccountManager
from .catalog import MenuManager
from .database import DatabaseManager, DataAccessError
from .menus import MenuOption, NumberedMenu
from .orders import OrderManager
from .stores import StoreManager

logger = logging.getLogger(__name__)

USAGE = "usage: pizzastore <dbname> <port> <user>"
EXIT_CHOICE = 9
LOGOUT_CHOICE = 20


# application wiring
class Application:
    """build the managers and the two menus around one database handle"""
    def __init__(self, db: DatabaseManager):
        self.db = db
        self.account_manager = AccountManager(db)
        self.menu_manager = MenuManager(db, self.account_manager)
        self.order_manager = OrderManager(db, self.account_manager)
        self.store_manager = StoreManager(db)

        self.main_menu = NumberedMenu("main menu", [
            MenuOption(1, "create user", self.account_manager.create_user),
            MenuOption(2, "log in", self.account_manager.login),
        ], EXIT_CHOICE, "< exit")

        # privileged options are listed for everyone; each action re-checks the role
        self.user_menu = NumberedMenu("main menu", [
            MenuOption(1, "view profile", self.account_manager.view_profile),
            MenuOption(2, "update profile", self.account_manager.update_profile),
            MenuOption(3, "view menu", self.menu_manager.view_menu),
            MenuOption(4, "place order", self.order_manager.place_order),
            MenuOption(5, "view full order id history", self.order_manager.view_all_orders),
            MenuOption(6, "view past 5 order ids", self.order_manager.view_recent_orders),
            MenuOption(7, "view order information", self.order_manager.view_order_info),
            MenuOption(8, "view stores", self.store_manager.view_stores),
            MenuOption(9, "update order status", self.order_manager.update_order_status),
            MenuOption(10, "update menu", self.menu_manager.update_menu),
            MenuOption(11, "update user", self.account_manager.update_user),
        ], LOGOUT_CHOICE, "log out", on_exit=self.account_manager.logout, divider="." * 25)

    def run(self):
        """top level loop; returns on exit choice or end of input"""
        try:
            while self.main_menu.prompt():
                if self.account_manager.current_login is not None:
                    self.user_menu.run()
        except EOFError:
            print()


def greeting():
    cprint("""
*******************************************************
              pizza store user interface 🍕
*******************************************************
""", "green", attrs=["bold"])


# entry point
def main(argv: list[str] | None = None) -> int:
    """entrypoint wrapper"""
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 3:
        cprint(USAGE, "red", file=sys.stderr)
        return 1
    logging.basicConfig(level=logging.WARNING,
                        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    # fix windows terminal misinterpreting ansi escape sequences
    enable_windows_ansi_interpretation()
    signal.signal(signal.SIGINT, SignalHandler.sigint)

    greeting()
    dbname, port, user = args
    print("connecting to database...")
    try:
        db = DatabaseManager.connect(dbname, port, user)
    except DataAccessError as e:
        logger.error("unable to connect to %s on port %s: %s", dbname, port, e)
        cprint(f"error - unable to connect to database: {e}", "red", file=sys.stderr)
        print("make sure you started postgres on this machine")
        return 1
    cprint("done", "green")

    with db:
        Application(db).run()
        print("disconnecting from database...", end=" ")
    cprint("done\n\nbye!", "green")
    return 0


# signal handler
class SignalHandler:
    """ctrl+c handler"""
    @staticmethod
    def sigint(_, __):
        cprint("\nnext time, use 9 to exit!", "yellow")
        sys.exit(0)

