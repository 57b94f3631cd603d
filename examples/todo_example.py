"""
Todo demo: two stores sequenced with wait_for, traced with dispatch_trace.

Demonstrates: Dispatcher → TodoStore → TodoLoggerStore (waits for TodoStore)
→ store listeners → trace report.
"""

import logging

from dispatch_trace import DispatchRecorder, print_report
from flux_core import Action, Dispatcher
from flux_core.examples.todo import ADD_TODO, DELETE_TODO, TOGGLE_TODO, TodoLoggerStore, TodoStore


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s | %(message)s")

    recorder = DispatchRecorder()
    dispatcher = Dispatcher(observers=[recorder])

    todos = TodoStore(dispatcher)
    todo_logger = TodoLoggerStore(dispatcher, todos)
    todos.add_listener(lambda: print(f"  [View] {[(t.text, t.complete) for t in todos.todos()]}"))

    dispatcher.dispatch(Action(ADD_TODO, "Buy milk"))
    dispatcher.dispatch(Action(ADD_TODO, "Write report"))
    dispatcher.dispatch(Action(TOGGLE_TODO, 1))
    dispatcher.dispatch(Action(DELETE_TODO, 2))

    print("\n--- Log store ---")
    for line in todo_logger.lines:
        print(f"  {line}")
    print()

    print_report(recorder)


if __name__ == "__main__":
    main()
