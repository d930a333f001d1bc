import asyncio

from textual.app import App
from textual.widgets import Tree

from containerps.actions import DELETE_CONFIRMATION
from containerps.config import AppConfig
from containerps.model import Action, ActionItem, ErrorLine, Separator, StaticItem
from containerps.state import AppContext
from containerps.textual_app import SEPARATOR, ContainerPSApp, item_label

from conftest import DB_LINE, WEB_LINE, FakeRunner, listing


def test_item_labels():
    assert item_label(StaticItem("Id: c1")).plain == "Id: c1"
    assert item_label(Separator()).plain == SEPARATOR
    assert item_label(ErrorLine("boom")).style == "red"
    reload_item = ActionItem("Reload List", Action.RELOAD, accelerator="ctrl+r")
    assert item_label(reload_item).plain == "Reload List  ctrl+r"


def make_app(runner):
    config = AppConfig()
    app = ContainerPSApp(config)
    app.attach(AppContext.create(config, sink=app, dialog=app, runner=runner))
    return app


def test_app_renders_inventory_after_first_refresh():
    runner = FakeRunner(listing(WEB_LINE, DB_LINE))
    app = make_app(runner)

    async def scenario():
        async with app.run_test() as pilot:
            await app.workers.wait_for_complete()
            await pilot.pause()

            tree = app.query_one("#menu", Tree)
            labels = [str(node.label) for node in tree.root.children]
            assert labels[0] == "Container PS"
            assert "● web" in labels
            assert "● db" in labels
            assert labels.index("● web") < labels.index("● db")
            assert not tree.disabled
            assert app.sub_title == ""
            assert not app.context.refresh.is_loading

    asyncio.run(scenario())
    assert runner.calls == [["docker", "container", "list", "--all", "--size"]]


def test_app_renders_error_block():
    runner = FakeRunner(failing={"container"})
    app = make_app(runner)

    async def scenario():
        async with app.run_test() as pilot:
            await app.workers.wait_for_complete()
            await pilot.pause()

            labels = [str(node.label) for node in app.query_one("#menu", Tree).root.children]
            assert "We can't get the container list back. Is Docker on?" in labels
            assert app.context.refresh.menu.is_error

    asyncio.run(scenario())


def test_sink_state_does_not_shadow_app_attributes():
    for name in ("app_config", "_menu_model", "_menu_loading", "_menu_ready"):
        assert not hasattr(App, name)


def test_confirm_dialog_returns_chosen_button():
    app = make_app(FakeRunner(listing()))
    answers = []

    async def ask():
        answers.append(await app.confirm(DELETE_CONFIRMATION))

    async def scenario():
        async with app.run_test() as pilot:
            await app.workers.wait_for_complete()
            app.run_worker(ask(), thread=False)
            await pilot.pause()

            assert app.screen.query_one("#modal").has_class("danger")
            await pilot.press("y")
            await app.workers.wait_for_complete()

    asyncio.run(scenario())
    assert answers == [1]
