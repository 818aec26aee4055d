from decimal import Decimal
from enum import Enum

from termcolor import cprint

from .accounts import AccountManager, Role
from .console import ActionAborted, ask, color_money, guarded, safe_int
from .database import DatabaseManager

DONE_SENTINEL = "done"
OPEN_FLAG = "yes"
RECENT_ORDER_LIMIT = 5


class OrderStatus(Enum):
    """order lifecycle"""
    INCOMPLETE = "incomplete"
    COMPLETE = "complete"


# order management
class OrderManager:
    """place orders, list order history, update order status"""
    def __init__(self, db: DatabaseManager, account_manager: AccountManager):
        self.db = db
        self.account_manager = account_manager

    def store_is_open(self, store_id: int) -> bool:
        rows = self.db.execute_query_rows(
            "SELECT isOpen FROM Store WHERE storeID = %s;", (store_id,)
        )
        return bool(rows) and (rows[0][0] or "").strip().lower() == OPEN_FLAG

    def item_price(self, item_name: str) -> Decimal | None:
        """price of a menu item by exact name, none if unknown"""
        rows = self.db.execute_query_rows(
            "SELECT price FROM Items WHERE itemName = %s;", (item_name,)
        )
        if not rows:
            return None
        return Decimal(rows[0][0])

    def next_order_id(self) -> int:
        """max + 1; not safe against another client inserting concurrently"""
        rows = self.db.execute_query_rows("SELECT COALESCE(MAX(orderID), 0) + 1 FROM FoodOrder;")
        return int(rows[0][0])

    def _collect_items(self) -> tuple[list[tuple[str, int]], Decimal]:
        """prompt item / quantity pairs until the sentinel; return lines and total"""
        lines: list[tuple[str, int]] = []
        total = Decimal("0")
        while True:
            name = ask(f"enter item name (or type '{DONE_SENTINEL}' to finish): ")
            if name.lower() == DONE_SENTINEL:
                return lines, total
            quantity = safe_int(ask("enter quantity: "), minimum=1)
            if quantity is None:
                cprint("invalid quantity, item skipped", "red"); continue
            price = self.item_price(name)
            if price is None:
                cprint("item not found. please enter a valid item.", "red"); continue
            total += price * quantity
            lines.append((name, quantity))

    @guarded
    def place_order(self):
        """order items from an open store"""
        store_id = safe_int(ask("enter store id: "))
        if store_id is None:
            raise ActionAborted("invalid store id")
        if not self.store_is_open(store_id):
            cprint("cannot place order. the selected store is closed.", "red"); return
        lines, total = self._collect_items()
        if not lines:
            cprint("no items selected. order cancelled.", "yellow"); return
        order_id = self.next_order_id()
        # header then lines, each its own statement
        self.db.execute_update(
            "INSERT INTO FoodOrder (orderID, login, storeID, totalPrice, orderTimestamp, orderStatus) "
            "VALUES (%s, %s, %s, %s, CURRENT_TIMESTAMP, %s);",
            (order_id, self.account_manager.current_login, store_id, total,
             OrderStatus.INCOMPLETE.value)
        )
        for name, quantity in lines:
            self.db.execute_update(
                "INSERT INTO ItemsInOrder (orderID, itemName, quantity) VALUES (%s, %s, %s);",
                (order_id, name, quantity)
            )
        cprint(f"order placed successfully. total price: {color_money(total)} order id: {order_id}", "green")

    @guarded
    def view_all_orders(self):
        """dump every order of the session user"""
        cprint("all orders:", "green", attrs=["bold"])
        count = self.db.execute_query_and_print(
            "SELECT * FROM FoodOrder WHERE login = %s;", (self.account_manager.current_login,)
        )
        if not count:
            cprint("no orders found.", "yellow")

    @guarded
    def view_recent_orders(self):
        """dump the most recent orders of the session user"""
        cprint("recent orders:", "green", attrs=["bold"])
        count = self.db.execute_query_and_print(
            "SELECT * FROM FoodOrder WHERE login = %s ORDER BY orderTimestamp DESC LIMIT %s;",
            (self.account_manager.current_login, RECENT_ORDER_LIMIT)
        )
        if not count:
            cprint("no recent orders found.", "yellow")

    def _read_order_id(self) -> int:
        order_id = safe_int(ask("enter order id: "))
        if order_id is None:
            raise ActionAborted("invalid order id")
        return order_id

    @guarded
    def view_order_info(self):
        """header and line items of any order"""
        order_id = self._read_order_id()
        rows = self.db.execute_query_rows(
            "SELECT orderTimestamp, totalPrice, orderStatus FROM FoodOrder WHERE orderID = %s;",
            (order_id,)
        )
        if not rows:
            cprint("order not found.", "red"); return
        timestamp, total, status = rows[0]
        cprint("order details:", "green", attrs=["bold"])
        print("timestamp:", timestamp)
        print("total price:", color_money(total))
        print("status:", (status or "").strip())
        items = self.db.execute_query_rows(
            "SELECT itemName, quantity FROM ItemsInOrder WHERE orderID = %s;", (order_id,)
        )
        cprint("items in order:", "green", attrs=["bold"])
        for name, quantity in items:
            print(f"item: {name}, quantity: {quantity}")

    @guarded
    def update_order_status(self):
        """drivers and managers only"""
        if not self.account_manager.require_role(Role.DRIVER, Role.MANAGER):
            return
        order_id = self._read_order_id()
        if not self.db.execute_query_count(
            "SELECT orderStatus FROM FoodOrder WHERE orderID = %s;", (order_id,)
        ):
            cprint("order not found.", "red"); return
        raw = ask("enter new status (incomplete or complete): ")
        try:
            status = OrderStatus(raw.lower())
        except ValueError:
            raise ActionAborted("invalid status. status must be 'incomplete' or 'complete'.") from None
        self.db.execute_update(
            "UPDATE FoodOrder SET orderStatus = %s WHERE orderID = %s;", (status.value, order_id)
        )
        cprint("order status updated successfully.", "green")
