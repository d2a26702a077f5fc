"""Carbon emission estimates for logged activities."""

# kg CO2 per unit of activity (km driven, kWh used, kg of waste).
EMISSION_FACTORS = {
    "Driving": 0.21,
    "ElectricityUsage": 0.527,
    "WasteDisposal": 0.06,
}

ACTIVITIES = tuple(EMISSION_FACTORS)


def calculate_carbon(activity: str, amount: float) -> float:
    """Return the estimated emission for ``amount`` units of ``activity``.

    Unknown activities have a factor of zero.
    """
    return EMISSION_FACTORS.get(activity, 0) * amount
