import logging
from enum import Enum

from termcolor import cprint, colored

from .console import ActionAborted, ask, guarded, read_choice
from .database import DatabaseManager, DataAccessError

logger = logging.getLogger(__name__)

LOGIN_FOREIGN_KEY = "foodorder_login_fkey"


class Role(Enum):
    """closed set of user roles"""
    CUSTOMER = "customer"
    DRIVER = "driver"
    MANAGER = "manager"


# accounts/auth
class AccountManager:
    """manage user accounts and session state (plain text passwords, as stored)"""
    def __init__(self, db: DatabaseManager):
        self.db = db
        self.current_login: str | None = None

    def user_exists(self, login: str) -> bool:
        """check if login exists"""
        return self.db.execute_query_count(
            "SELECT login FROM Users WHERE login = %s;", (login,)
        ) > 0

    def current_role(self) -> str | None:
        """re-query the role of the session user"""
        if self.current_login is None:
            return None
        rows = self.db.execute_query_rows(
            "SELECT role FROM Users WHERE login = %s;", (self.current_login,)
        )
        if not rows or rows[0][0] is None:
            return None
        return rows[0][0].strip().lower()

    def require_role(self, *roles: Role) -> bool:
        """guard for privileged actions"""
        if self.current_login is None:
            cprint("please login first", "red"); return False
        role = self.current_role()
        if role is None:
            cprint("user not found", "red"); return False
        if role not in {r.value for r in roles}:
            allowed = " and ".join(f"{r.value}s" for r in roles)
            cprint(f"access denied. only {allowed} can do this.", "red")
            return False
        return True

    @guarded
    def create_user(self):
        """create a customer account"""
        login = ask("enter user login: ")
        if self.user_exists(login):
            cprint("entered login already exists", "red"); return
        phone = ask("provide phone number: ")
        password = ask("provide a password: ")
        self.db.execute_update(
            "INSERT INTO Users (login, password, role, phoneNum) VALUES (%s, %s, %s, %s);",
            (login, password, Role.CUSTOMER.value, phone)
        )
        cprint("account created, going back to main menu", "green")

    def login(self) -> str | None:
        """interactive login; returns the login or none"""
        try:
            login = ask("enter login: ")
            if self.db.execute_query_count(
                "SELECT login FROM Users WHERE login = %s;", (login,)
            ) != 1:
                cprint("login was not found", "red"); return None
            password = ask("enter password: ")
            if self.db.execute_query_count(
                "SELECT password FROM Users WHERE login = %s AND password = %s;",
                (login, password)
            ) != 1:
                cprint("incorrect password", "red"); return None
        except DataAccessError as e:
            logger.debug("login failed", exc_info=True)
            cprint(f"failed: {e}", "red")
            return None
        self.current_login = login
        cprint(f"logged in as {colored(login, 'yellow', attrs=['bold'])}", "green")
        return login

    def logout(self):
        """log out current user"""
        if self.current_login is None:
            cprint("no user logged in", "red")
            return
        cprint(f"logged out {self.current_login}", "green")
        self.current_login = None

    def _fetch_profile(self) -> list[str | None]:
        rows = self.db.execute_query_rows(
            "SELECT login, password, role, favoriteItems, phoneNum FROM Users WHERE login = %s;",
            (self.current_login,)
        )
        if not rows:
            raise ActionAborted("user not found")
        return rows[0]

    @guarded
    def view_profile(self):
        """print the session user's profile"""
        login, password, role, favorite, phone = self._fetch_profile()
        cprint("---user profile---", "green", attrs=["bold"])
        print("user:", login)
        print("password:", password)
        print("role:", (role or "").strip())
        print("favorite item:", favorite)
        print("phone number:", phone)

    @guarded
    def update_profile(self):
        """change password, phone number or favorite item"""
        profile = self._fetch_profile()
        print(f"hello {self.current_login}, what do you want to update?")
        print("1. change password")
        print("2. change phone number")
        print("3. update favorite item")
        choice = read_choice()
        if choice == 1:
            # compared against the copy fetched above, not the live row
            if ask("enter current password: ") != (profile[1] or "").strip():
                cprint("incorrect password", "red"); return
            self._set_own_field("password", ask("enter new password: "))
        elif choice == 2:
            if ask("enter current phone number ie(123-567-9979): ") != (profile[4] or "").strip():
                cprint("phone number does not match", "red"); return
            self._set_own_field("phoneNum", ask("enter new number: "))
        elif choice == 3:
            self._set_own_field("favoriteItems", ask("enter new favorite item: "))
        else:
            cprint("unrecognized choice!", "red")

    def _set_own_field(self, column: str, value: str):
        # column names come from update_profile only, never from input
        self.db.execute_update(
            f"UPDATE Users SET {column} = %s WHERE login = %s;", (value, self.current_login)
        )
        cprint("update successful", "green")

    @guarded
    def update_user(self):
        """manager only: rename a login or change a role"""
        if not self.require_role(Role.MANAGER):
            return
        print("hello manager, select an option:")
        print("1. edit a user's login")
        print("2. edit a user's role")
        choice = read_choice()
        if choice == 1:
            self._rename_login()
        elif choice == 2:
            self._change_role()
        else:
            raise ActionAborted("invalid selection. returning to main menu.")

    def _rename_login(self):
        old_login = ask("enter the current login name: ")
        if not self.user_exists(old_login):
            raise ActionAborted(f"user '{old_login}' does not exist.")
        new_login = ask("enter the new login name: ")
        if self.user_exists(new_login):
            raise ActionAborted(f"new login '{new_login}' already exists. choose another.")
        try:
            # four independent statements; a failure part way leaves the key dropped
            self.db.execute_update(f"ALTER TABLE FoodOrder DROP CONSTRAINT {LOGIN_FOREIGN_KEY};")
            self.db.execute_update(
                "UPDATE Users SET login = %s WHERE login = %s;", (new_login, old_login)
            )
            self.db.execute_update(
                "UPDATE FoodOrder SET login = %s WHERE login = %s;", (new_login, old_login)
            )
            self.db.execute_update(
                f"ALTER TABLE FoodOrder ADD CONSTRAINT {LOGIN_FOREIGN_KEY} "
                "FOREIGN KEY (login) REFERENCES Users(login) ON DELETE CASCADE;"
            )
        except DataAccessError as e:
            raise ActionAborted(f"error updating login: {e}") from e
        if self.current_login == old_login:
            self.current_login = new_login
        cprint("user login updated successfully", "green")

    def _change_role(self):
        login = ask("enter the user login name: ")
        if not self.user_exists(login):
            raise ActionAborted(f"user '{login}' does not exist.")
        raw = ask("enter new role: ")
        try:
            role = Role(raw)
        except ValueError:
            choices = ", ".join(f"'{r.value}'" for r in Role)
            raise ActionAborted(f"invalid role. choose from: {choices}.") from None
        self.db.execute_update(
            "UPDATE Users SET role = %s WHERE login = %s;", (role.value, login)
        )
        cprint("user role updated successfully", "green")
