from termcolor import cprint

from .console import guarded
from .database import DatabaseManager


class StoreManager:
    """read only view over the store table"""
    def __init__(self, db: DatabaseManager):
        self.db = db

    @guarded
    def view_stores(self):
        """list every store with its status and review score"""
        stores = self.db.execute_query_rows(
            "SELECT storeID, address, city, state, isOpen, reviewScore FROM Store;"
        )
        if not stores:
            cprint("no stores available.", "yellow"); return
        cprint("all stores:", "green", attrs=["bold"])
        for store_id, address, city, state, is_open, score in stores:
            print(f"store id: {store_id}, address: {address}, city: {city}, state: {state}, "
                  f"open status: {is_open}, review score: {score}")
