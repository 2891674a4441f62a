import asyncio
import logging

from mealmate.events.Event_Bus import ALL_ALERTS, EventBus
from mealmate.events.notifications import Notifier
from mealmate.infra.api_client import ApiClient
from mealmate.infra.Plan_Repository import PlanRepository
from mealmate.infra.Session_Storage import SessionStorage
from mealmate.infra.Suggestion_Client import SuggestionClient
from mealmate.logic.auth.session import AuthSession
from mealmate.logic.planning.constraints import ConstraintsStep
from mealmate.logic.planning.suggestions import ACTION_ALTERNATIVE, SuggestionsStep
from mealmate.utilities.config import API_BASE_URL, LOG_LEVEL
from mealmate.utilities.constants import SHORT_DAY_NAMES

logger = logging.getLogger("mealmate")


def _print_alert(event_name, alert):
    print(f"[{alert.title}] {alert.message}")


def _print_week(step: SuggestionsStep) -> None:
    for i, day in enumerate(step.suggestions):
        if day.is_skipped:
            what = day.label or "Skipped"
        elif day.recipe is not None:
            what = str(day.recipe)
        else:
            what = "No recipe available - try adjusting your filters"
        print(f"  {i}. {day.day_name:<9} {day.date}  {what}")
    print(f"  {step.meal_count()} meal(s) planned")


async def plan_week() -> None:
    bus = EventBus()
    bus.subscribe_all(ALL_ALERTS, _print_alert)
    notifier = Notifier(bus)
    storage = SessionStorage()

    async with ApiClient(API_BASE_URL, storage=storage) as client:
        session = AuthSession(client, storage)
        if await session.restore() is None:
            print("Not signed in; requests will be sent without a token.")

        suggestions_client = SuggestionClient(client)
        constraints = ConstraintsStep(suggestions_client, notifier)
        logger.info("Planning week of %s", constraints.start_date)
        print(f"Hey! Ready to plan this week's dinners? {constraints.week_label()}")
        skip = input("Days to skip (e.g. 'Sat Sun', empty for none): ").split()
        for name in skip:
            if name[:3].title() in SHORT_DAY_NAMES:
                constraints.toggle_day(SHORT_DAY_NAMES.index(name[:3].title()))
        if not constraints.can_generate:
            print("Pick at least one day to cook.")
            return

        result = await constraints.generate()
        if result is None:
            return
        step = SuggestionsStep.from_generation(result, suggestions_client, PlanRepository(client), notifier)

        while True:
            _print_week(step)
            command = input("[number] another idea, [r]efresh, [a]pprove, [q]uit: ").strip().lower()
            if command == "q":
                return
            if command == "r":
                await step.refresh()
            elif command == "a":
                approved = await step.approve()
                if approved is not None:
                    print()
                    print(approved.share_message())
                    return
            elif command.isdigit() and int(command) < len(step.suggestions):
                day = step.suggestions[int(command)]
                if ACTION_ALTERNATIVE in step.available_actions(day.date):
                    await step.request_alternative(day.date)
                else:
                    print(f"{day.day_name} has no suggestion to swap.")


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        asyncio.run(plan_week())
    except KeyboardInterrupt:
        pass
