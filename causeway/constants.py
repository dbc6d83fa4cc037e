# causeway/constants.py
# ------------------------------------------------------------
# Engineering constants and lookup tables for the causeway model.
# Every number the calculators use lives here so a project can audit
# (or override through CausewayConfig) a single table.

# ============================================================
# Structural model
# ============================================================
CONCRETE_DENSITY = 2.4          # t/m^3, dead load = volume * density
LIVE_LOAD_INTENSITY = 5.0       # kN/m^2 over the deck area
FOUNDATION_AREA_FACTOR = 1.2    # footprint is 20% larger than the deck
STEEL_RATIO = 0.08              # t of reinforcement per m^3 of concrete

PILE_PRESSURE_THRESHOLD = 100.0  # foundation pressure above which piles are used
COFFERDAM_DEPTH_THRESHOLD = 2.0  # m, water depth above which a cofferdam is needed

SOIL_BEARING_CAPACITY = {
    "soft": 50.0,
    "medium": 150.0,
    "hard": 300.0,
}
DEFAULT_SOIL_BEARING_CAPACITY = 100.0  # lenient fallback for unrecognised soils

# Deck beam idealisation (M25 concrete)
ELASTIC_MODULUS = 25000.0       # N/mm^2
CONCRETE_GRADE_FCK = 25.0       # N/mm^2
ALLOWABLE_STRESS_RATIO = 0.45   # allowable compressive stress = 0.45 fck
DEFLECTION_LIMIT_RATIO = 250.0  # allowable deflection = L / 250

# Design considerations
EXPANSION_JOINT_SPACING = 30.0  # m
DRAIN_SPACING = 2.0             # m of deck width per longitudinal drain
WATER_LEVEL_VARIATION = 0.3     # fraction of water depth (seasonal)
SCOUR_PROTECTION_RATIO = 0.5    # fraction of water depth

# ============================================================
# Cost model (INR)
# ============================================================
UNIT_RATES = {
    "concrete": 6500.0,    # per m^3
    "steel": 65000.0,      # per t
    "formwork": 450.0,     # per m^2
    "excavation": 250.0,   # per m^3
}
EXCAVATION_FACTOR = 1.2    # excavated volume = factor * concrete volume
LABOR_FRACTION = 0.35      # labour = fraction of region-adjusted material cost
CURRENCY = "INR"

REGION_MULTIPLIERS = {
    "standard": 1.00,
    "urban": 1.20,
    "rural": 0.85,
}

# ============================================================
# Environmental model
# ============================================================
CONCRETE_CARBON_RATE = 410.0    # kg CO2e per m^3
STEEL_CARBON_RATE = 1850.0      # kg CO2e per t
CARBON_REFERENCE_PER_METRE = 20000.0  # kg CO2e per metre of causeway scoring 100

SCOUR_FACTORS = {
    "soft": 1.0,
    "medium": 0.6,
    "hard": 0.3,
}
DEFAULT_SCOUR_FACTOR = 0.6

ENVIRONMENTAL_WEIGHTS = {
    "carbon": 0.5,
    "flow_obstruction": 0.5,
}

# Upper bounds of the impact score bands (lower is better)
ENVIRONMENTAL_BANDS = (
    (25.0, "Excellent"),
    (50.0, "Good"),
    (75.0, "Fair"),
)

FLOW_OBSTRUCTION_ADVISORY = 35.0  # % above which ventway openings are advised
SCOUR_ADVISORY_DEPTH = 1.5        # m above which bio-engineering protection is advised

# ============================================================
# Health score step functions: (threshold, score), first match wins
# ============================================================
SAFETY_SCORE_STEPS = ((3.5, 100), (3.0, 95), (2.5, 85), (2.0, 70), (1.5, 50))
SAFETY_SCORE_FLOOR = 30

ECONOMY_SCORE_STEPS = ((4.0, 60), (3.0, 75), (2.5, 90), (2.0, 100), (1.5, 70))
ECONOMY_SCORE_FLOOR = 40

# volume per metre (m^3/m) upper bounds
ENVIRONMENTAL_SCORE_STEPS = ((15.0, 100), (20.0, 90), (25.0, 80), (30.0, 70), (40.0, 60))
ENVIRONMENTAL_SCORE_FLOOR = 50

STRUCTURAL_BASE_SCORE = 85
STRUCTURAL_PENALTY = 10
STRUCTURAL_SCORE_FLOOR = 50
BENDING_MOMENT_LIMIT = 1000.0
DEFLECTION_LIMIT = 50.0

HEALTH_RATING_BANDS = (
    (90, "Excellent"),
    (80, "Very Good"),
    (70, "Good"),
    (60, "Fair"),
)
HEALTH_RECOMMENDATION_THRESHOLD = 70

# ============================================================
# Comparison
# ============================================================
COST_TOLERANCE_PCT = 2.0  # cost changes within ±2% count as "no cost penalty"
