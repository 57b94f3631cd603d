"""
wait_for demo: ordering, diamond dependencies, and error recovery with bare callbacks.

Shows that a failed dispatch (here a circular wait_for) leaves the dispatcher
idle and ready for the next dispatch.
"""

from __future__ import annotations

from flux_core import CircularDependencyError, Dispatcher


def main() -> None:
    dispatcher = Dispatcher()
    tokens: dict[str, str] = {}
    state: dict[str, int] = {}

    def totals(payload: dict) -> None:
        # Registered first, but needs both derived values.
        dispatcher.wait_for([tokens["doubled"], tokens["squared"]])
        state["total"] = state["doubled"] + state["squared"]

    def doubled(payload: dict) -> None:
        dispatcher.wait_for([tokens["source"]])
        state["doubled"] = state["value"] * 2

    def squared(payload: dict) -> None:
        dispatcher.wait_for([tokens["source"]])
        state["squared"] = state["value"] ** 2

    def source(payload: dict) -> None:
        state["value"] = payload["value"]
        if payload.get("cycle"):
            dispatcher.wait_for([tokens["totals"]])

    tokens["totals"] = dispatcher.register(totals)
    tokens["doubled"] = dispatcher.register(doubled)
    tokens["squared"] = dispatcher.register(squared)
    tokens["source"] = dispatcher.register(source)

    dispatcher.dispatch({"value": 3})
    print(f"value=3 -> {state}")

    try:
        dispatcher.dispatch({"value": 4, "cycle": True})
    except CircularDependencyError as exc:
        print(f"Dispatch failed: {exc}")
    print(f"is_dispatching after failure: {dispatcher.is_dispatching()}")

    dispatcher.dispatch({"value": 5})
    print(f"value=5 -> {state}")


if __name__ == "__main__":
    main()
