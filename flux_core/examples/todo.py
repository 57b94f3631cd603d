"""
Todo example stores.

TodoStore keeps a list of todos; TodoLoggerStore waits for it and logs the
resulting count, showing wait_for between stores.
"""

from dataclasses import dataclass, replace
from typing import Any

from flux_core.actions import Action
from flux_core.dispatcher import Dispatcher
from flux_core.store import Store

ADD_TODO = "todo/add"
TOGGLE_TODO = "todo/toggle"
DELETE_TODO = "todo/delete"


@dataclass(frozen=True)
class Todo:
    id: int
    text: str
    complete: bool = False


class TodoStore(Store):
    """Todos keyed by id, in insertion order."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        super().__init__(dispatcher)
        self._todos: dict[int, Todo] = {}
        self._next_id = 1

    def todos(self) -> list[Todo]:
        return list(self._todos.values())

    def on_dispatch(self, payload: Any) -> None:
        if not isinstance(payload, Action):
            return
        if payload.type == ADD_TODO:
            text = str(payload.payload or "").strip()
            if not text:
                return
            self._todos[self._next_id] = Todo(id=self._next_id, text=text)
            self._next_id += 1
            self.emit_change()
        elif payload.type == TOGGLE_TODO:
            todo = self._todos.get(payload.payload)
            if todo is None:
                return
            self._todos[todo.id] = replace(todo, complete=not todo.complete)
            self.emit_change()
        elif payload.type == DELETE_TODO:
            if self._todos.pop(payload.payload, None) is not None:
                self.emit_change()


class TodoLoggerStore(Store):
    """
    Appends one line per action after TodoStore has handled it.
    Registered before or after TodoStore; wait_for makes the order irrelevant.
    """

    def __init__(self, dispatcher: Dispatcher, todo_store: TodoStore) -> None:
        super().__init__(dispatcher)
        self._todo_store = todo_store
        self.lines: list[str] = []

    def on_dispatch(self, payload: Any) -> None:
        if not isinstance(payload, Action):
            return
        self.get_dispatcher().wait_for([self._todo_store.dispatch_token])
        self.lines.append(f"{payload.type}: {len(self._todo_store.todos())} todo(s)")
        self.emit_change()
