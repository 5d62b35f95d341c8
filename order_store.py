# order_store.py

import json
import os
import shutil
import tempfile
import threading
from typing import Any, Dict, List, Optional

from errors import StorageCorruptionError
from logger import logger
from models import Order, make_order


class OrderStore:
    """
    Persists every order in a single JSON document holding an array of
    order objects. The document is always read and written as a whole.
    """

    def __init__(self, path: str):
        """
        :param path: Filesystem path of the JSON document.
        """
        self.path = path
        # Serializes the read-modify-write in create()
        self._write_lock = threading.Lock()

    def bootstrap(self) -> None:
        """
        Create the document with an empty array if it does not exist yet.
        """
        if os.path.exists(self.path):
            return
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump([], f)
        logger.info(f"Created empty order store at {self.path}")

    def list(self) -> List[Order]:
        """
        Read all orders from the document.

        :return: Orders in insertion order; an empty document yields [].
        :raises StorageCorruptionError: The document is not a JSON array.
        """
        with open(self.path, "r", encoding="utf-8") as f:
            content = f.read()

        if not content.strip():
            return []

        try:
            orders = json.loads(content)
        except json.JSONDecodeError as e:
            raise StorageCorruptionError(
                f"Order store {self.path} is not valid JSON: {e}"
            ) from e

        if not isinstance(orders, list):
            raise StorageCorruptionError(
                f"Order store {self.path} does not hold a JSON array"
            )
        return orders

    def get(self, order_id: str) -> Optional[Order]:
        """
        Find a single order by its identifier.

        :return: The order, or None when no order has this id.
        """
        for order in self.list():
            if order.get("id") == order_id:
                return order
        return None

    def create(self, fields: Dict[str, Any]) -> Order:
        """
        Append a new order built from ``fields`` and rewrite the document.

        :param fields: Caller-supplied order fields.
        :return: The stored order including its generated id.
        """
        order = make_order(fields)
        with self._write_lock:
            orders = self.list()
            orders.append(order)
            self._write(orders)

        logger.info(f"Order {order['id']} created ({len(orders)} stored)")
        return order

    def _write(self, orders: List[Order]) -> None:
        # Replace the document atomically so readers never see a partial file
        directory = os.path.dirname(os.path.abspath(self.path))
        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                fd = None
                json.dump(orders, f, ensure_ascii=False, allow_nan=False)
            # mkstemp creates the file 0600; keep the document's own mode
            shutil.copymode(self.path, tmp_path)
            os.replace(tmp_path, self.path)
        except BaseException:
            if fd is not None:
                os.close(fd)
            os.unlink(tmp_path)
            raise
