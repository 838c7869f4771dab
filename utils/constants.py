"""
Constants used throughout RespiGuard Snow
Initial readings, metric bounds, risk thresholds and narrative templates
"""

# ==================== Initial Readings ====================

INITIAL_ENV = {
    "temperature": -2.5,
    "humidity": 78.0,
    "pm25": 12.0,
    "snow_depth": 15.0,
    "co_level": 0.5,
}

INITIAL_HEALTH = {
    "heart_rate": 75.0,
    "spo2": 98.0,
    "respiratory_rate": 16.0,
    "body_temp": 36.8,
}

# ==================== Simulator Bounds ====================

METRIC_BOUNDS = {
    "temperature": {"min": -15.0, "max": 5.0},
    "humidity": {"min": 40.0, "max": 100.0},
    "pm25": {"min": 0.0, "max": None},
    "snow_depth": {"min": 0.0, "max": None},
    "heart_rate": {"min": 60.0, "max": 130.0},
    "spo2": {"min": 90.0, "max": 100.0},
    "respiratory_rate": {"min": 12.0, "max": 30.0},
}

# Random-walk step sizes: delta = (u - center) * scale
RANDOM_WALK = {
    "temperature": {"center": 0.5, "scale": 0.2},
    "pm25": {"center": 0.5, "scale": 2.0},
    "humidity": {"center": 0.5, "scale": 1.0},
    "heart_rate": {"center": 0.5, "scale": 4.0},
    "spo2": {"center": 0.4, "scale": 0.5},
    "respiratory_rate": {"center": 0.5, "scale": 1.0},
}

SNOWFALL_PROBABILITY_CUTOFF = 0.8
SNOWFALL_INCREMENT = 0.1

STRESS_PM25_THRESHOLD = 35.0
STRESS_TEMPERATURE_THRESHOLD = -10.0
STRESS_FACTOR = 1.05

# ==================== Risk Scoring ====================

RISK_WEIGHTS = {
    "temperature": 0.3,
    "pm25": 0.3,
    "spo2": 0.2,
    "heart_rate": 0.2,
}

# Evaluated high to low, first match wins
RISK_SCORE_THRESHOLDS = [
    (3.0, "Critical"),
    (2.2, "High"),
    (1.5, "Moderate"),
]

# ==================== Narrative Templates ====================

WEATHER_CONTEXTS = {
    "cold_snap": "Severe Cold Snap",
    "particulates": "High Particulate Matter",
    "hypoxemia": "Hypoxemia Detected",
    "inversion": "Winter Inversion Layer",
    "snow_exertion": "Snowy Conditions with Elevated Heart Rate",
    "stable": "Stable Winter Conditions",
}

NARRATIVES = {
    "cold_snap_severe": {
        "summary": "Extreme cold is straining your airways and vitals are responding. Bronchospasm risk is high right now.",
        "recommendations": [
            "Move indoors to a warm environment immediately.",
            "Use your rescue inhaler if you feel chest tightness.",
            "Contact your care provider if breathing does not ease.",
        ],
    },
    "cold_snap": {
        "summary": "Temperatures are well below -10°C. Cold, dry air can trigger airway narrowing even while vitals look steady.",
        "recommendations": [
            "Wear a scarf over your nose and mouth to warm the air.",
            "Keep your rescue inhaler accessible.",
            "Limit time and exertion outdoors.",
        ],
    },
    "particulates_severe": {
        "summary": "PM2.5 is above safe limits and your body is showing signs of stress. Fine particles are a major asthma trigger.",
        "recommendations": [
            "Stay indoors with windows closed.",
            "Run an air purifier with a HEPA filter.",
            "Wear an N95 mask if you must go outside.",
        ],
    },
    "particulates": {
        "summary": "PM2.5 levels are elevated above 35 µg/m³. Sensitive airways may react to prolonged exposure.",
        "recommendations": [
            "Reduce prolonged outdoor activity.",
            "Consider wearing an N95 mask outdoors.",
            "Keep windows closed while levels stay high.",
        ],
    },
    "hypoxemia": {
        "summary": "Blood oxygen saturation has dropped below 95%. This needs prompt attention.",
        "recommendations": [
            "Stop all physical activity and rest.",
            "Use prescribed oxygen or rescue medication if available.",
            "Seek medical help if SpO2 keeps falling.",
        ],
    },
    "inversion": {
        "summary": "Freezing air is trapping pollutants near the ground. Air quality may worsen through the day.",
        "recommendations": [
            "Avoid outdoor exercise during morning and evening hours.",
            "Keep your rescue inhaler accessible.",
        ],
    },
    "snow_exertion": {
        "summary": "Deep snow and an elevated heart rate suggest heavy exertion in the cold.",
        "recommendations": [
            "Take regular breaks from shoveling or walking in snow.",
            "Breathe through your nose to warm incoming air.",
            "Stop and rest if you feel short of breath.",
        ],
    },
    "stable": {
        "summary": "Conditions are stable and your vitals are within normal range. Enjoy the winter day with usual precautions.",
        "recommendations": [
            "Dress in layers and keep your airways covered.",
            "Stay hydrated.",
        ],
    },
}

# ==================== Alerts ====================

BANNER_ALERTS = {
    "hypoxia": {"metric": "spo2", "below": 94.0, "message": "Low Oxygen Saturation Detected."},
    "high_pollution": {"metric": "pm25", "above": 35.0, "message": "High Particulate Matter detected."},
    "freezing": {"metric": "temperature", "below": -10.0, "message": "Severe cold detected."},
}

CARD_ALERTS = {
    "pm25": {"above": 25.0},
    "heart_rate": {"above": 110.0},
    "spo2": {"below": 95.0},
}

# ==================== Trends ====================

# Minimum per-tick slope before a metric counts as rising or falling
TREND_TOLERANCE = {
    "temperature": 0.01,
    "humidity": 0.05,
    "pm25": 0.1,
    "snow_depth": 0.005,
    "heart_rate": 0.2,
    "spo2": 0.02,
    "respiratory_rate": 0.05,
}

# ==================== Metric Information ====================

METRICS = {
    "temperature": {"label": "Temperature", "unit": "°C", "group": "env"},
    "humidity": {"label": "Humidity", "unit": "%", "group": "env"},
    "pm25": {"label": "PM2.5", "unit": "µg/m³", "group": "env"},
    "snow_depth": {"label": "Snow Depth", "unit": "cm", "group": "env"},
    "co_level": {"label": "Carbon Monoxide", "unit": "ppm", "group": "env"},
    "heart_rate": {"label": "Heart Rate", "unit": "bpm", "group": "health"},
    "spo2": {"label": "SpO2", "unit": "%", "group": "health"},
    "respiratory_rate": {"label": "Respiratory Rate", "unit": "bpm", "group": "health"},
    "body_temp": {"label": "Body Temp", "unit": "°C", "group": "health"},
}

ADVISOR_LABELS = {
    "gemini": "Powered by {model}",
    "mock": "Using intelligent mock analysis",
}
