"""
Response handlers

One handler per intent of the restaurant corpus. A handler turns the utterance
and its recognized entities into the response text; it reads at most the
first Name and the first FoodItem entity and falls back to a generic phrasing
when they are missing.
"""
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..models.response import RecognizedEntity

Handler = Callable[[str, Sequence[RecognizedEntity]], str]

NAME = "Name"
FOOD_ITEM = "FoodItem"


def first_entity(entities: Optional[Sequence[RecognizedEntity]], entity_type: str) -> str:
    """Value of the first entity of a type, or an empty string"""
    for entity in entities or ():
        if entity.entity_type == entity_type:
            return entity.entity_value
    return ""


def _current_hour() -> int:
    return datetime.now().hour


def _tidy(text: str) -> str:
    return " ".join(text.split())


def _for_name(name: str) -> str:
    return f" for {name}" if name else ""


def greeting(utterance: str, entities: Sequence[RecognizedEntity]) -> str:
    name = first_entity(entities, NAME)
    hour = _current_hour()
    if hour < 12:
        part_of_day = "morning"
    elif hour < 18:
        part_of_day = "afternoon"
    else:
        part_of_day = "evening"
    return _tidy(f"Good {part_of_day} {name}") + ", how can I help you?"


def goodbye(utterance: str, entities: Sequence[RecognizedEntity]) -> str:
    name = first_entity(entities, NAME)
    hour = _current_hour()
    if hour < 12:
        return _tidy(f"Have a great morning {name}")
    if hour < 18:
        return _tidy(f"Have a great afternoon {name}")
    return _tidy(f"Good night {name}")


def compliment(utterance: str, entities: Sequence[RecognizedEntity]) -> str:
    return _tidy(f"Thank you that was nice of you {first_entity(entities, NAME)}")


def criticism(utterance: str, entities: Sequence[RecognizedEntity]) -> str:
    return _tidy(f"I am sorry you feel that way! {first_entity(entities, NAME)}")


def menu(utterance: str, entities: Sequence[RecognizedEntity]) -> str:
    food = first_entity(entities, FOOD_ITEM)
    if food:
        return f"Yes we do have {food}"
    return "Getting you the menu of what food we have"


def _search(category: str) -> Handler:
    """Handler that fetches a named food item, or every item of a category"""

    def handler(utterance: str, entities: Sequence[RecognizedEntity]) -> str:
        food = first_entity(entities, FOOD_ITEM)
        if food:
            return f"Getting {food}{_for_name(first_entity(entities, NAME))}"
        return f"Getting all {category} available"

    handler.__name__ = f"search_{category.replace('-', '_').replace(' ', '_')}"
    return handler


search_dosa = _search("dosas")
search_idly = _search("idlies")
search_nonveg_appetizer = _search("non-veg appetizers")
search_veg_appetizer = _search("veg appetizers")
search_beverage = _search("beverages")


def order(utterance: str, entities: Sequence[RecognizedEntity]) -> str:
    food = first_entity(entities, FOOD_ITEM)
    if food:
        return f"Ordering {food}{_for_name(first_entity(entities, NAME))}. Confirm?"
    return "Please specify what to order."


def support(utterance: str, entities: Sequence[RecognizedEntity]) -> str:
    name = first_entity(entities, NAME)
    return f"SupportInformation {name}" if name else "SupportInformation"


# label -> (handler, requires follow-up)
DEFAULT_HANDLERS = {
    "Greeting": (greeting, False),
    "Goodbye": (goodbye, False),
    "Compliment": (compliment, False),
    "Criticism": (criticism, False),
    "Menu": (menu, False),
    "SearchDosa": (search_dosa, False),
    "SearchIdly": (search_idly, False),
    "SearchNonvegAppetizer": (search_nonveg_appetizer, False),
    "SearchVegAppetizer": (search_veg_appetizer, False),
    "SearchBeverage": (search_beverage, False),
    "Order": (order, True),
    "Support": (support, False),
}
