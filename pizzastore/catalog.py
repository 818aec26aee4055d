from decimal import Decimal
from enum import Enum

from termcolor import cprint

from .accounts import AccountManager, Role
from .console import (ActionAborted, ask, guarded, heading, print_item_line,
                      read_choice, safe_decimal)
from .database import DatabaseManager

ZERO = Decimal("0")


class Category(Enum):
    """menu sections, in display order"""
    ENTREE = "entree"
    SIDES = "sides"
    DRINKS = "drinks"


# single section filters, by menu number
FILTER_OPTIONS = {
    1: Category.DRINKS,
    2: Category.SIDES,
    3: Category.ENTREE,
}
SORT_OPTIONS = {
    5: "DESC",
    6: "ASC",
}
# item fields a manager may edit in place, by menu number
EDITABLE_FIELDS = {
    2: ("ingredients", "ingredients: "),
    3: ("typeOfItem", "type of item: "),
    4: ("price", "edit price: "),
    5: ("description", "enter description of item: "),
}


def parse_category(raw: str) -> Category:
    try:
        return Category(raw)
    except ValueError:
        raise ActionAborted("invalid type of item") from None

def parse_price(raw: str) -> Decimal:
    price = safe_decimal(raw, minimum=ZERO)
    if price is None:
        raise ActionAborted("invalid price")
    return price


# menu browsing / editing
class MenuManager:
    """browse, filter and (for managers) edit menu items"""
    def __init__(self, db: DatabaseManager, account_manager: AccountManager):
        self.db = db
        self.account_manager = account_manager

    def fetch_items(self, category: Category, max_price: Decimal | None = None,
                    order: str | None = None) -> list[list[str | None]]:
        """items whose type contains the category word, freshly queried"""
        sql = "SELECT itemName, price FROM Items WHERE typeOfItem LIKE %s"
        params: list = [f"%{category.value}%"]
        if max_price is not None:
            sql += " AND price <= %s"
            params.append(max_price)
        if order is not None:
            sql += f" ORDER BY price {order}"
        return self.db.execute_query_rows(sql + ";", params)

    def print_category(self, category: Category, **kwargs):
        """print one menu section"""
        heading(category.value)
        for name, price in self.fetch_items(category, **kwargs):
            print_item_line(name, price)
        print()

    def print_menu(self, **kwargs):
        """print every section"""
        for category in Category:
            self.print_category(category, **kwargs)

    @guarded
    def view_menu(self):
        """show the menu then loop over filter / sort options"""
        heading("menu")
        self.print_menu()
        while True:
            print("filter search by:")
            print("1. drinks")
            print("2. sides")
            print("3. entree")
            print("4. food items under a certain price")
            print("5. sort menu highest to lowest price")
            print("6. sort menu lowest to highest price\n")
            print("8. back to menu")
            print("9. main menu\n")
            choice = read_choice()
            if choice in FILTER_OPTIONS:
                self.print_category(FILTER_OPTIONS[choice])
            elif choice == 4:
                max_price = safe_decimal(ask("enter a price $ "))
                if max_price is None:
                    cprint("invalid price", "red"); continue
                self.print_menu(max_price=max_price)
            elif choice in SORT_OPTIONS:
                self.print_menu(order=SORT_OPTIONS[choice])
            elif choice == 8:
                self.print_menu()
            elif choice == 9:
                return
            else:
                cprint("unrecognized choice!", "red")

    def fetch_item(self, name: str) -> list[str | None] | None:
        """full item row by exact name"""
        rows = self.db.execute_query_rows(
            "SELECT itemName, ingredients, typeOfItem, price, description FROM Items WHERE itemName = %s;",
            (name,)
        )
        return rows[0] if rows else None

    @guarded
    def update_menu(self):
        """manager only: edit or add menu items"""
        if not self.account_manager.require_role(Role.MANAGER):
            return
        print("select one of the following options")
        print("1. update item")
        print("2. add new item to menu")
        print("3. go to main menu")
        choice = read_choice()
        if choice == 1:
            self._edit_item()
        elif choice == 2:
            self._add_item()
        elif choice != 3:
            cprint("unrecognized choice!", "red")

    def _edit_item(self):
        name = ask("enter an item name: ")
        item = self.fetch_item(name)
        if item is None:
            raise ActionAborted("item not found")
        item_name, ingredients, category, price, description = item
        print("item:", item_name)
        print("ingredients:", ingredients)
        print("type of item:", category)
        print("price:", price)
        print("description:", description)
        print("select option: item (1), ingredients (2), type (3), price (4), description (5)")
        choice = read_choice()
        if choice == 1:
            new_name = ask("rename item: ")
            if not new_name:
                raise ActionAborted("item name cannot be blank")
            if self.fetch_item(new_name) is not None:
                raise ActionAborted("item exists in data base")
            # copy the row server side; rows in ItemsInOrder keep pointing at the old name
            self.db.execute_update(
                "INSERT INTO Items (itemName, ingredients, typeOfItem, price, description) "
                "SELECT %s, ingredients, typeOfItem, price, description FROM Items WHERE itemName = %s;",
                (new_name, item_name)
            )
            self.db.execute_update("DELETE FROM Items WHERE itemName = %s;", (item_name,))
            cprint(f"renamed {item_name} to {new_name}", "green")
            return
        if choice not in EDITABLE_FIELDS:
            cprint("unrecognized choice!", "red"); return
        column, prompt = EDITABLE_FIELDS[choice]
        value = ask(prompt)
        if column == "typeOfItem":
            value = parse_category(value).value
        elif column == "price":
            value = parse_price(value)
        self.db.execute_update(
            f"UPDATE Items SET {column} = %s WHERE itemName = %s;", (value, item_name)
        )
        cprint("item updated", "green")

    def _add_item(self):
        name = ask("name of item: ")
        if self.fetch_item(name) is not None:
            raise ActionAborted("item exists in data base")
        ingredients = ask("enter ingredients: ")
        category = parse_category(ask("enter type of item: "))
        price = parse_price(ask("enter price: "))
        description = ask("enter description: ")
        self.db.execute_update(
            "INSERT INTO Items (itemName, ingredients, typeOfItem, price, description) "
            "VALUES (%s, %s, %s, %s, %s);",
            (name, ingredients, category.value, price, description)
        )
        cprint("added new item to data base", "green")
