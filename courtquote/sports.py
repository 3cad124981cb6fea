"""
Sports offered on the quotation form and the equipment each one ships with.

Equipment ids key into the catalog's equipment table for unit costs.
"""

SPORTS = [
    {"id": "basketball", "name": "Basketball Court"},
    {"id": "badminton", "name": "Badminton Court"},
    {"id": "boxcricket", "name": "Box Cricket"},
    {"id": "football", "name": "Football Field"},
    {"id": "gymflooring", "name": "Gym Flooring"},
    {"id": "pickleball", "name": "Pickleball Court"},
    {"id": "running-track", "name": "Running Track"},
    {"id": "tennis", "name": "Tennis Court"},
    {"id": "volleyball", "name": "Volleyball Court"},
]

SPORT_NAMES = {sport["id"]: sport["name"] for sport in SPORTS}

EQUIPMENT_BY_SPORT = {
    "basketball": [
        {"id": "basketball-hoop", "name": "Basketball Hoop System", "quantity": 2},
        {"id": "basketball-backboard", "name": "Backboard", "quantity": 2},
        {"id": "basketball-poles", "name": "Basketball Poles", "quantity": 2},
    ],
    "badminton": [
        {"id": "badminton-posts", "name": "Badminton Posts", "quantity": 2},
        {"id": "badminton-net", "name": "Badminton Net", "quantity": 1},
    ],
    "boxcricket": [
        {"id": "cricket-net", "name": "Cricket Net", "quantity": 1},
        {"id": "cricket-matting", "name": "Cricket Matting", "quantity": 1},
        {"id": "cricket-stumps", "name": "Cricket Stumps", "quantity": 3},
    ],
    "football": [
        {"id": "football-goalpost", "name": "Football Goalpost", "quantity": 2},
        {"id": "football-net", "name": "Goal Net", "quantity": 2},
    ],
    "gymflooring": [],
    "pickleball": [
        {"id": "pickleball-net", "name": "Pickleball Net", "quantity": 1},
        {"id": "pickleball-posts", "name": "Pickleball Posts", "quantity": 2},
    ],
    "running-track": [
        {"id": "track-lane-marking", "name": "Track Lane Marking", "quantity": 1},
        {"id": "starting-blocks", "name": "Starting Blocks", "quantity": 8},
    ],
    "tennis": [
        {"id": "tennis-net", "name": "Tennis Net", "quantity": 1},
        {"id": "tennis-posts", "name": "Tennis Posts", "quantity": 2},
    ],
    "volleyball": [
        {"id": "volleyball-posts", "name": "Volleyball Posts", "quantity": 2},
        {"id": "volleyball-net", "name": "Volleyball Net", "quantity": 1},
    ],
}


def sport_display_name(sport: str) -> str:
    """Form label for a sport id; unknown ids are title-cased."""
    if not sport:
        return ""
    return SPORT_NAMES.get(sport, sport.replace("-", " ").replace("_", " ").title())


def priced_equipment(sport: str, catalog) -> list:
    """Default equipment for a sport with catalog unit costs and line totals."""
    items = []
    for item in EQUIPMENT_BY_SPORT.get(sport, []):
        unit_cost = catalog.equipment_unit_cost(item["id"])
        items.append({
            **item,
            "unitCost": unit_cost,
            "totalCost": unit_cost * (item.get("quantity") or 1),
        })
    return items
