import unittest

import pytest

from mealmate.domain.GroceryList import GroceryItem, GroceryList
from mealmate.domain.Store import Store
from mealmate.domain.User import User
from mealmate.infra.GroceryList_Repository import GroceryListRepository
from mealmate.infra.Plan_Repository import PlanRepository
from mealmate.logic.grocery.shopping import (
    GroceryHistory,
    GroceryListBuilder,
    ShoppingTrip,
    can_delete,
    group_by_category,
)

MONDAY = "2024-06-10"


def _names(sections):
    return [(s.category, [item.name for _, item in s.entries]) for s in sections]


class TestGroupByCategory(unittest.TestCase):

    def setUp(self):
        self.items = [
            GroceryItem("Spaghetti", category="Pantry"),
            GroceryItem("Onion", category="Produce"),
            GroceryItem("Naan", category="Bakery"),
            GroceryItem("Lemons", category="Produce"),
            GroceryItem("Firelighters", category="Garden"),
        ]

    def test_follows_store_order_and_keeps_indexes(self):
        sections = group_by_category(self.items, ["Bakery", "Produce", "Pantry"])
        self.assertEqual(_names(sections), [
            ("Bakery", ["Naan"]),
            ("Produce", ["Onion", "Lemons"]),
            ("Pantry", ["Spaghetti"]),
            ("Garden", ["Firelighters"]),
        ])
        self.assertEqual([index for index, _ in sections[1].entries], [1, 3])

    def test_unnamed_categories_come_last_alphabetically(self):
        sections = group_by_category(self.items, ["Produce"])
        self.assertEqual([s.category for s in sections], ["Produce", "Bakery", "Garden", "Pantry"])

    def test_search_filters_by_name(self):
        sections = group_by_category(self.items, query=" ON ")
        self.assertEqual(_names(sections), [("Produce", ["Onion", "Lemons"])])

    def test_empty(self):
        self.assertEqual(group_by_category([]), [])


class TestGroceryListEntity(unittest.TestCase):

    def test_progress(self):
        grocery_list = GroceryList("g1", "Week", MONDAY, "2024-06-16",
                                   items=[GroceryItem("A", is_checked=True), GroceryItem("B")])
        self.assertEqual(grocery_list.checked_count, 1)
        self.assertEqual(grocery_list.progress, 0.5)
        self.assertFalse(grocery_list.is_complete)

        done = grocery_list.with_item(1, grocery_list.items[1].replace(is_checked=True))
        self.assertTrue(done.is_complete)
        self.assertFalse(grocery_list.items[1].is_checked)

    def test_empty_list_is_never_complete(self):
        empty = GroceryList("g1", "Week", MONDAY, "2024-06-16")
        self.assertEqual(empty.progress, 0.0)
        self.assertFalse(empty.is_complete)

    def test_from_dict(self):
        grocery_list = GroceryList.from_dict({
            "_id": "g1", "name": "Next 7 Dinners", "status": "archived",
            "startDate": MONDAY, "endDate": "2024-06-16",
            "items": [{"name": "Onion", "quantity": "1 + 2", "category": "Produce",
                       "recipeIds": ["r1", "r2"], "recipeNames": ["A", "B"], "isChecked": True}],
        })
        self.assertTrue(grocery_list.is_archived)
        item = grocery_list.items[0]
        self.assertEqual((item.name, item.quantity, item.category), ("Onion", "1 + 2", "Produce"))
        self.assertEqual(item.recipe_ids, ["r1", "r2"])
        self.assertTrue(item.is_checked)
        self.assertEqual(GroceryItem.from_dict({"name": "Salt"}).category, "Other")


class TestCanDelete(unittest.TestCase):

    def test_roles(self):
        self.assertTrue(can_delete(None))
        self.assertTrue(can_delete(User("u3", "cy@example.com", "Cy")))
        self.assertTrue(can_delete(User("u1", "ada@example.com", "Ada", role="admin", household_id="h1")))
        self.assertFalse(can_delete(User("u2", "bo@example.com", "Bo", household_id="h1")))


def _builder(api, notifier=None):
    return GroceryListBuilder(PlanRepository(api), GroceryListRepository(api), notifier, today=MONDAY)


def test_builder_date_taps():
    builder = GroceryListBuilder(None, None, today=MONDAY)
    assert (builder.start_date, builder.end_date, builder.day_count) == (MONDAY, "2024-06-16", 7)
    assert len(builder.selectable_dates()) == 21

    builder.tap_date("2024-06-12")
    assert (builder.start_date, builder.end_date, builder.picking) == ("2024-06-12", "2024-06-16", "end")
    builder.tap_date("2024-06-14")
    assert (builder.start_date, builder.end_date, builder.picking) == ("2024-06-12", "2024-06-14", None)
    assert builder.in_range("2024-06-13") and not builder.in_range("2024-06-15")

    # a new start after the current end pulls the end along
    builder.tap_date("2024-06-20")
    assert (builder.start_date, builder.end_date) == ("2024-06-20", "2024-06-20")
    # an end before the start collapses the range onto that day
    builder.tap_date("2024-06-18")
    assert (builder.start_date, builder.end_date, builder.day_count) == ("2024-06-18", "2024-06-18", 1)

    builder.picking = "start"
    builder.tap_date("2024-06-25")
    assert (builder.start_date, builder.end_date, builder.picking) == ("2024-06-25", "2024-06-25", "end")

    with pytest.raises(ValueError):
        builder.tap_date("2024-06-31")


@pytest.mark.asyncio
async def test_builder_creates_list_from_planned_dinners(api, backend):
    backend.set_plan(MONDAY, recipe_id="r1")
    backend.set_plan("2024-06-11", recipe_id="r2")
    backend.set_plan("2024-06-12", label="Eating Out")
    builder = _builder(api)

    plans = await builder.load_plans()
    assert [p.date for p in plans] == [MONDAY, "2024-06-11"]
    assert backend.requests["plans"]

    grocery_list = await builder.generate()
    assert backend.requests["create_grocery_list"] == [{"startDate": MONDAY, "endDate": "2024-06-16"}]
    assert grocery_list.name == "Next 7 Dinners"
    assert [i.name for i in grocery_list.items] == ["Spaghetti", "Ground beef", "Onion", "Coconut milk", "Naan"]
    onion = grocery_list.items[2]
    assert onion.quantity == "1 + 2"
    assert onion.recipe_names == ["Spaghetti Bolognese", "Veggie Curry"]


@pytest.mark.asyncio
async def test_builder_without_plans_asks_to_plan_first(api, backend, notifier, alerts):
    builder = _builder(api, notifier)
    assert await builder.load_plans() == []
    assert await builder.generate() is None
    assert "create_grocery_list" not in backend.requests
    assert [(name, options.title) for name, options in alerts] == [("alert.info", "No Plans")]


@pytest.mark.asyncio
async def test_builder_failures(api, backend, notifier, alerts):
    backend.set_plan(MONDAY, recipe_id="r1")
    builder = _builder(api, notifier)
    backend.fail.add("plans")
    assert await builder.load_plans() == []

    backend.fail.discard("plans")
    await builder.load_plans()
    backend.fail.add("create_grocery_list")
    assert await builder.generate() is None
    assert [(name, options.message) for name, options in alerts] == [("alert.error", "create_grocery_list failed")]


async def _trip(api, backend, notifier=None, store=None, items=None):
    seeded = backend.add_grocery_list("Week", items or [
        {"name": "Onion", "category": "Produce"},
        {"name": "Spaghetti", "category": "Pantry"},
        {"name": "Naan", "category": "Bakery"},
    ])
    return await ShoppingTrip.open(GroceryListRepository(api), seeded["_id"], store, notifier)


@pytest.mark.asyncio
async def test_store_mode_walks_the_store_order(api, backend):
    trip = await _trip(api, backend, store=Store("s2", "Big Market", ["Bakery", "Pantry", "Produce"]))
    assert [s.category for s in trip.sections()] == ["Bakery", "Pantry", "Produce"]

    trip.store = None
    assert [s.category for s in trip.sections()] == ["Produce", "Pantry", "Bakery"]
    assert _names(trip.sections("naa")) == [("Bakery", ["Naan"])]


@pytest.mark.asyncio
async def test_check_off_item(api, backend, notifier, alerts):
    trip = await _trip(api, backend, notifier)
    assert await trip.toggle_item(1) is True
    assert trip.item(1).is_checked
    assert backend.requests["update_grocery_item"] == [{"index": 1, "isChecked": True}]
    assert backend.grocery_lists[0]["items"][1]["isChecked"] is True

    assert await trip.toggle_item(1) is True
    assert not trip.item(1).is_checked
    assert backend.requests["update_grocery_item"][-1] == {"index": 1, "isChecked": False}
    assert alerts == []


@pytest.mark.asyncio
async def test_failed_check_off_reverts_quietly(api, backend, notifier, alerts):
    trip = await _trip(api, backend, notifier)
    before = trip.grocery_list
    backend.fail.add("update_grocery_item")

    assert await trip.toggle_item(0) is False
    assert trip.grocery_list is before
    assert not trip.item(0).is_checked
    assert alerts == []


@pytest.mark.asyncio
async def test_checking_the_last_item_celebrates(api, backend, notifier, alerts):
    trip = await _trip(api, backend, notifier, items=[
        {"name": "Onion", "category": "Produce", "isChecked": True},
        {"name": "Naan", "category": "Bakery"},
    ])
    await trip.toggle_item(1)
    assert trip.grocery_list.is_complete
    assert [(name, options.title) for name, options in alerts] == [("alert.success", "All Done!")]


@pytest.mark.asyncio
async def test_add_item_by_hand_also_saves_a_staple(api, backend, notifier, alerts):
    trip = await _trip(api, backend, notifier)
    assert await trip.add_item("  Ice cream ", category="Frozen") is True
    assert backend.requests["add_grocery_item"] == [{"name": "Ice cream", "category": "Frozen", "saveToStaples": True}]
    assert trip.item(3).name == "Ice cream"
    assert any(s["name"] == "Ice cream" for s in backend.staples)

    assert await trip.add_item("   ") is False
    backend.fail.add("add_grocery_item")
    assert await trip.add_item("Ketchup") is False
    assert len(trip.grocery_list.items) == 4
    assert [(name, options.message) for name, options in alerts] == [("alert.error", "Failed to add item")]


@pytest.mark.asyncio
async def test_remove_item_after_confirmation(api, backend, notifier, alerts):
    trip = await _trip(api, backend, notifier)
    options = trip.remove_item(0)
    assert alerts[0] == ("alert.confirm", options)
    assert options.destructive
    assert "remove_grocery_item" not in backend.requests

    assert await options.on_confirm() is True
    assert [i.name for i in trip.grocery_list.items] == ["Spaghetti", "Naan"]

    backend.fail.add("remove_grocery_item")
    assert await trip.remove_item(0).on_confirm() is False
    assert len(trip.grocery_list.items) == 2
    assert alerts[-1][1].message == "Failed to remove item"


@pytest.mark.asyncio
async def test_opening_a_missing_list(api, notifier, alerts):
    assert await ShoppingTrip.open(GroceryListRepository(api), "nope", notifier=notifier) is None
    assert [(name, options.message) for name, options in alerts] == [("alert.error", "Failed to load grocery list")]


@pytest.mark.asyncio
async def test_history_archive_and_restore(api, backend, notifier, alerts):
    backend.add_grocery_list("Old", [{"name": "Onion"}])
    newest = backend.add_grocery_list("New", [{"name": "Naan"}])
    history = GroceryHistory(GroceryListRepository(api), notifier)
    assert [g.name for g in await history.load()] == ["New", "Old"]

    options = history.toggle_archive(newest["_id"])
    assert (options.title, options.message, options.confirm_text) == ("Archive List", 'Archive "New"?', "Archive")
    assert await options.on_confirm() is True
    assert history.get(newest["_id"]).is_archived
    assert backend.requests["update_grocery_list"] == [{"status": "archived"}]

    options = history.toggle_archive(newest["_id"])
    assert options.title == "Restore List"
    backend.fail.add("update_grocery_list")
    assert await options.on_confirm() is False
    assert history.get(newest["_id"]).is_archived
    assert alerts[-1][1].message == "Failed to restore list"


@pytest.mark.asyncio
async def test_history_delete(api, backend, notifier, alerts):
    seeded = backend.add_grocery_list("Week", [])
    history = GroceryHistory(GroceryListRepository(api), notifier)
    await history.load()

    options = history.delete(seeded["_id"])
    assert options.message == "Are you sure you want to delete this grocery list?"
    assert await options.on_confirm() is True
    assert history.lists == []
    assert backend.grocery_lists == []


@pytest.mark.asyncio
async def test_household_member_cannot_delete_lists(api, backend):
    seeded = backend.add_grocery_list("Week", [])
    member = User("u2", "bo@example.com", "Bo", household_id="h1")
    history = GroceryHistory(GroceryListRepository(api), user=member)
    await history.load()
    assert not history.can_delete
    with pytest.raises(PermissionError):
        history.delete(seeded["_id"])
    assert "delete_grocery_list" not in backend.requests


@pytest.mark.asyncio
async def test_history_load_failure_is_empty(api, backend):
    backend.add_grocery_list("Week", [])
    backend.fail.add("grocery_lists")
    history = GroceryHistory(GroceryListRepository(api))
    assert await history.load() == []
