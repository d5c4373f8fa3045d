"""
Event vocabulary
================

Maps each standardised NWS Directive 10-1605 event type to the raw EVTYPE
labels that mean the same thing. The raw labels were curated by hand from the
1950-2011 Storm Database, so the lists are full of typos, truncations and
magnitudes embedded in the label ("hail 075", "tstm wind (g45)").

This is data, not logic: the classifier only builds a reverse index from it.
Alternate vocabulary versions can be loaded from JSON with `load_vocabulary`.

Order matters: if a raw label is listed under two event types, the one that
comes later in this mapping wins.
"""

from __future__ import annotations
import json
from typing import Dict, Mapping, Sequence, Tuple

from .errors import VocabularyError

OTHER = "other"
SUMMARY = "summary"

# NWS Directive 10-1605, Table 1 (lower case, document order).
CANONICAL_EVENTS: Tuple[str, ...] = (
    "astronomical low tide",
    "avalanche",
    "blizzard",
    "coastal flood",
    "cold/wind chill",
    "debris flow",
    "dense fog",
    "dense smoke",
    "drought",
    "dust devil",
    "dust storm",
    "excessive heat",
    "extreme cold/wind chill",
    "flash flood",
    "flood",
    "frost/freeze",
    "funnel cloud",
    "freezing fog",
    "hail",
    "heat",
    "heavy rain",
    "heavy snow",
    "high surf",
    "high wind",
    "hurricane (typhoon)",
    "ice storm",
    "lake-effect snow",
    "lakeshore flood",
    "lightning",
    "marine hail",
    "marine high wind",
    "marine strong wind",
    "marine thunderstorm wind",
    "rip current",
    "seiche",
    "sleet",
    "storm surge/tide",
    "strong wind",
    "thunderstorm wind",
    "tornado",
    "tropical depression",
    "tropical storm",
    "tsunami",
    "volcanic ash",
    "waterspout",
    "wildfire",
    "winter storm",
    "winter weather",
)

CATCH_ALL_EVENTS: Tuple[str, ...] = (OTHER, SUMMARY)

EVENT_SYNONYMS: Dict[str, Tuple[str, ...]] = {
    "astronomical low tide": (
        "astronomical low tide", "blow-out tide", "blow-out tides",
    ),
    "avalanche": (
        "avalance", "avalanche", "landslide", "landslides",
        "landslide/urban flood", "landslump", "mudslide", "mud slide",
        "mudslides", "mud slides", "mud slides urban flooding", "rock slide",
        "urban flood landslide", "mud/rock slide", "mudslide/landslide",
    ),
    "blizzard": (
        "blizzard", "blizzard/winter storm", "high wind/blizzard",
        "ground blizzard", "blizzard and extreme wind chil",
        "blizzard and heavy snow", "blizzard/freezing rain",
        "blizzard/heavy snow", "blizzard/high wind", "blizzard summary",
        "blizzard weather", "high wind/ blizzard",
        "high wind/blizzard/freezing ra", "high wind/wind chill/blizzard",
        "blowing snow", "blowing snow & extreme wind ch",
        "blowing snow- extreme wind chi", "blowing snow/extreme wind chil",
        "snowstorm", "high wind and heavy snow",
    ),
    "coastal flood": (
        "beach erosion", "beach erosin", "beach erosion/coastal flood",
        "beach flood", "coastal erosion", "coastal flood", "coastal flooding",
        "coastalflood", "erosion/cstl flood", "coastal flooding/erosion",
        "coastalstorm", "coastal storm", "coastal surge",
        "high winds/coastal flood", " coastal flood", "coastal/tidal flood",
        "cstl flooding/erosion",
    ),
    "cold/wind chill": (
        "cold", "cold air tornado", "cold and snow", "cold and wet conditions",
        "cold temperature", "cold wave", "cold weather", "cold/wind chill",
        "cold/winds", "cool and wet", "unseasonable cold", "unseasonably cold",
        "low temperature", "cold and frost", "cold temperatures",
        "cold wind chill temperatures", "cool spell",
        "snow- high wind- wind chill", "wind chill", "wind chill/high wind",
        "high wind/low wind chill", "high winds and wind chill",
        "high wind/wind chill", "low wind chill", "record snow/cold",
        "record snowfall", "record winter snow", "prolong cold",
        "prolong cold/snow", "unseasonably cool", "unseasonably cool & wet",
    ),
    # No matching labels in the 1950-2011 data cut.
    "debris flow": (),
    "dense fog": (
        "fog", "fog and cold temperatures", "dense fog", "patchy dense fog",
    ),
    "dense smoke": (
        "dense smoke", "smoke",
    ),
    "drought": (
        "drought", "drought/excessive heat", "heat wave drought",
        "abnormally dry", "below normal precipitation", "record dry month",
        "record dryness", "dry", "dry conditions", "dry hot weather",
        "dryness", "dry pattern", "dry spell", "dry weather",
        "excessive heat/drought", "excessively dry", "heat drought",
        "heat/drought", "very dry", "unseasonably dry", "hot and dry",
        "hot/dry pattern", "driest month", "snow drought",
        "warm dry conditions",
    ),
    "dust devil": (
        "dust devel", "dust devil", "dust devil waterspout",
    ),
    "dust storm": (
        "blowing dust", "dust storm", "duststorm", "dust storm/high winds",
        "saharan dust", "high winds dust storm",
    ),
    "excessive heat": (
        "extreme heat", "excessive heat", "record/excessive heat", "very warm",
        "unseasonably hot", "unusually warm", "unusual/record warmth",
        "unusual warmth", "unseasonably warm & wet", "unseasonably warm year",
        "unseasonably warm/wet", "record warm", "record warm temps.",
        "record warmth", "record heat wave", "record high temperature",
        "record high temperatures", "hot pattern", "hot spell", "hot weather",
        "high temperature record", "abnormal warmth", "prolong warmth",
    ),
    "extreme cold/wind chill": (
        "extended cold", "extreme cold", "extreme cold/wind chill",
        "extreme windchill", "extreme wind chill", "record cold", "record snow",
        "agricultural freeze", "hard freeze", "excessive cold",
        "extreme/record cold", "extreme wind chill/blowing sno",
        "extreme wind chills", "extreme windchill temperatures", "severe cold",
        "hyperthermia/exposure", "hypothermia", "hypothermia/exposure",
        "recordcold", "record cold and high wind", "record cold/frost",
        "record cool", "record  cold", "unusually cold", "unseasonal low temp",
        "low temperature record",
    ),
    "flash flood": (
        "dam break", " flash flood", "flash flood", "flash flood from ice jams",
        "flash flood - heavy rain", "flash flooding/thunderstorm wi",
        "flash flood/landslide", "flash flood landslides", "flash flood winds",
        "flash flood/", "flash flood/ flood", "flash flood/ street",
        "flash flood/flood", "flash flooding", "flash flooding/flood",
        "flash floods", "flash floooding", "flood flash", "flood flood/flash",
        "flood/flash", "flood/flash flood", "flood/flash flooding",
        "flood/flash/flood", "flood/flashflood", "local flash flood",
        "rapidly rising water", "flash flood/heavy rain",
        "thunderstorm winds/flash flood", "dam failure",
    ),
    "flood": (
        "flooding", "floods", "river and stream flood", "river flood",
        "river flooding", "major flood", "flood & heavy rain",
        "flood/rain/winds", "rural flood", "small stream flood",
        "snowmelt flooding", "urban and small", "urban and small stream floodin",
        "urban flood", "urban flooding", "urban floods", "urban small",
        "urban/small stream", "urban/small stream flood",
        "urban/sml stream fld", "flood", "flooding/heavy rain",
        "flood/river flood", "ice floes", "ice jam", "ice jam flooding",
        "ice jam flood (minor", "minor flooding", "breakup flooding",
        "severe turbulence", "flood/rain/wind", "flood/strong wind",
        "flood watch/", "hail flooding", "urban and small stream flood",
        "urban/small flooding", "urban small stream flood",
        "urban/small streamflood", "urban/small stream flooding",
        "urban/small strm fldg", "urban/sml stream fldg",
        "urban/street flooding", "local flood", "minor flood",
        "high winds/flooding", "highway flooding", "heavy rain/flooding",
        "heavy rain/urban flood", "stream flooding", "street flood",
        "street flooding", "small stream and urban flood",
        "small stream and urban floodin", "small stream flooding",
        "small stream urban flood", "small stream/urban flood",
        "sml stream fld", "urban and small stream", "urban/small",
        "small stream", "small stream and", "urban/small stream  flood",
    ),
    "frost/freeze": (
        "freeze", "damaging freeze", "frost", "early frost", "freezing spray",
        "frost/freeze", "frost\\freeze", "early freeze", "first frost",
    ),
    "funnel cloud": (
        "funnel", "funnel cloud.", "funnel clouds", "funnels", "funnel cloud",
        "cold air funnel", "cold air funnels", "funnel cloud/hail",
    ),
    "freezing fog": (
        "freezing fog", "glaze", "glaze ice", "glaze/ice storm", "ice fog",
    ),
    "hail": (
        "hail", "hail damage", "hail/wind", "hail/winds", "hail 0.75",
        "hail 0.88", "hail 075", "hail 088", "hail 1.00", "hail 1.75",
        "hail 1.75)", "hail 100", "hail 125", "hail 150", "hail 175",
        "hail 200", "hail 225", "hail 275", "hail 450", "hail 75", "hail 80",
        "hail 88", "hail(0.75)", "hailstorm", "small hail", "non severe hail",
        "deep hail", "hail aloft", "hail/icy roads", "hail storm", "hailstorms",
        "ice pellets",
    ),
    "heat": (
        "heat", "record heat", "unseasonably warm", "unseasonably warm and dry",
        "warm weather", "heat wave", "heat waves",
    ),
    "heavy rain": (
        "excessive rainfall", "excessive wetness", "heavy precipitation",
        "heavy rain", "heavy rain and flood", "heavy rain/lightning",
        "heavy rains/flooding", "heavy rain/small stream urban",
        "heavy rain/snow", "heavy rainfall", "heavy rains", "hvy rain",
        "heavy rain/severe weather", "torrential rainfall", "rain/wind",
        "record rainfall", "rain", "rain/snow", "rainstorm", "heavy shower",
        "unseasonal rain", "heavy mix", "abnormally wet", "prolonged rain",
        "rain and wind", "rain damage", "rain (heavy)", "record precipitation",
        "excessive precipitation", "excessive rain", "extremely wet",
        "torrential rain", "heavy precipatation", "heavy rain and wind",
        "heavy rain effects", "heavy rain/mudslides/flood",
        "heavy rain; urban flood winds;", "heavy rain/wind", "heavy showers",
        "unseasonably wet", "wet month", "wet weather", "wet year",
        "record/excessive rainfall", "record low rainfall",
        "locally heavy rain", "early rain",
    ),
    "heavy snow": (
        "excessive snow", "heavy snow", "heavy snow and high winds",
        "heavy snow and strong winds", "heavy snow/blizzard",
        "heavy snow/blizzard/avalanche", "heavy snow/freezing rain",
        "heavy snow/high winds & flood", "heavy snow/ice", "heavy snowpack",
        "heavy snow shower", "heavy snow squalls", "heavy snow-squalls",
        "heavy snow/squalls", "heavy snow/wind", "heavy snow/winter storm",
        "heavy snow and", "heavy snow andblowing snow", "heavy snow and ice",
        "heavy snow and ice storm", "heavy snow/blowing snow",
        "heavy snowfreezing rain", "heavy snow/high", "heavy snow/high wind",
        "heavy snow/high winds", "heavy snow/high winds/freezing",
        "heavy snow & ice", "heavy snow/ice storm", "heavy snow/sleet",
        "heavy wet snow", "snow advisory", "drifting snow", "near record snow",
        "record may snow", "heavy snow   freezing rain",
    ),
    "high surf": (
        "high surf", "   high surf advisory", "heavy surf",
        "heavy surf and wind", "heavy surf coastal flooding",
        "heavy surf/high surf", "tidal flooding", "tidal flood", "rogue wave",
        "rough seas", "rough surf", "hazardous surf", "heavy rain/high surf",
        "astronomical high tide", "high surf advisories", "high surf advisory",
        "highswells", "high wind and high tides", "high  swells",
    ),
    "high wind": (
        "high wind (g40)", "high wind 48", "high wind 63", "high wind 70",
        "high winds", "high winds 55", "high winds 57", "high winds 58",
        "high winds 63", "high winds 66", "high winds 67", "high winds 73",
        "high winds 76", "high winds 80", "high winds 82", "high winds/cold",
        "strong winds", "tropical storm", "high wind", "high wind damage",
        "high wind/heavy snow", "high  winds", "high winds/",
        "high winds/heavy rain", "high winds heavy rains", "high winds/snow",
        "storm force winds", "wake low wind", " wind", "wind advisory",
        "wind gusts", "strong wind gust",
    ),
    "hurricane (typhoon)": (
        "hurricane", "hurricane edouard", "hurricane emily", "hurricane erin",
        "hurricane felix", "hurricane gordon", "hurricane opal",
        "hurricane opal/high winds", "hurricane/typhoon", "typhoon",
        "remnants of floyd",
    ),
    "ice storm": (
        "ice storm", "ice storm/flash flood", "snow and ice storm",
        "snow/ice storm", "ice storm and snow", "icestorm/blizzard",
    ),
    "lake-effect snow": (
        "lake effect snow", "lake-effect snow", "heavy lake snow",
    ),
    "lakeshore flood": (
        "lake flood", "lakeshore flood",
    ),
    "lightning": (
        "lighting", "lightning  wauseon", "lightning damage", "lightning fire",
        "lightning injury", "lightning thunderstorm winds",
        "lightning thunderstorm windss", "lightning.", "ligntning",
        "lightning", "lightning and heavy rain",
        "lightning and thunderstorm win", "lightning/heavy rain",
        " lightning", "lightning and winds",
    ),
    "marine hail": (
        "marine hail",
    ),
    "marine high wind": (
        "marine high wind",
    ),
    "marine strong wind": (
        "marine strong wind",
    ),
    "marine thunderstorm wind": (
        "marine thunderstorm wind", "marine tstm wind",
    ),
    "rip current": (
        "rip current", "rip currents/heavy surf", "rip currents", "drowning",
        "rip currents heavy surf",
    ),
    "seiche": (
        "seiche",
    ),
    "sleet": (
        "sleet", "sleet/ice storm", "mixed precip", "mixed precipitation",
        "light freezing rain", "freezing drizzle and freezing",
        "freezing rain and sleet", "freezing rain and snow",
        "freezing rain sleet and", "freezing rain sleet and light",
        "freezing rain", "freezing drizzle", "freezing rain/sleet",
        "freezing rain/snow", "snow freezing rain", "snow/freezing rain",
        "sleet & freezing rain", "sleet/freezing rain", "sleet/rain/snow",
        "sleet/snow", "sleet storm", "snow/rain", "snow/rain/sleet",
        "snow sleet", "snow/sleet/rain", "snow and sleet", "wet snow",
    ),
    "storm surge/tide": (
        "storm surge", "storm surge/tide", "high seas", "high swells",
        "high tides", "high water", "high waves", "high wind and seas",
        "high wind/seas", "heavy seas", "hurricane-generated swells",
        "heavy swells", "marine accident", "marine mishap", "wind and wave",
    ),
    "strong wind": (
        "wind storm", "strong wind", "wind", "winds", "wnd",
        "non-severe wind damage", "non-tstm wind", "non tstm wind",
        "wind damage", "wind/hail", "gusty wind", "gusty wind/hail",
        "gusty wind/hvy rain", "gusty wind/rain", "gusty winds",
        "gusty lake wind", "gusty thunderstorm wind",
        "gusty thunderstorm winds", "gradient wind", "gradient winds",
        "heatburst",
    ),
    "thunderstorm wind": (
        "gustnado", "gustnado and", "microburst", "microburst winds",
        "wet microburst", "wet micoburst", "dry microburst",
        "dry microburst 50", "dry microburst 53", "dry microburst 58",
        "dry microburst 61", "dry microburst 84", "dry microburst winds",
        "downburst", "dry mircoburst winds", "thunderstorm hail",
        "thunderstorm wind/awning", "thunderstorm wind", "thuderstorm winds",
        "thundeerstorm winds", "thunderestorm winds", "thunderstorm",
        "thunderstorm  winds", "thunderstorm damage", "thunderstorm damage to",
        "thunderstorm w inds", "thunderstorm winds 2",
        "thunderstorm wind (g40)", "thunderstorm winds 13",
        "thunderstorm wind 50", "thunderstorm wind g50",
        "thunderstorm winds 50", "thunderstorm wind g51",
        "thunderstorm wind g52", "thunderstorm wind 52",
        "thunderstorm winds 52", "thunderstorm winds53",
        "thunderstorm winds 53", "thunderstorm wind g55",
        "thunderstorm wind 56", "thunderstorm wind 59",
        "thunderstorm wind 59 mph", "thunderstorm wind 59 mph.",
        "thunderstorm wind 60 mph", "thunderstorm winds      le cen",
        "thunderstorm winds 60", "thunderstorm winds g60",
        "thunderstorm winds 61", "thunderstorm winds 62",
        "thunderstorm winds 63 mph", "thunderstorm wind 65 mph",
        "thunderstorm wind 65mph", "thunderstorm wind 69",
        "thunderstorm wind 98 mph", "thunderstorm wind g60",
        "thunderstorm wind g61", "thunderstorm wind trees",
        "thunderstorm wind.", "thunderstorm winds", "thunderstorm winds and",
        "thunderstorm winds.", "thunderstorm windss", "thunderstorm wins",
        "thunderstorms", "thunderstorms wind", "thunderstorms winds",
        "thunderstormw", "thunderstormw 50", "thunderstormw winds",
        "thunderstormwinds", "thunderstrom wind", "thunderstrom winds",
        "thundertorm winds", "thundertsorm wind", "thundestorm winds",
        "thunerstorm winds", "tstm", " tstm wind", "tstm wind and lightning",
        "tstm wind damage", " tstm wind (g45)", "tstm wind",
        "tstm wind (g35)", "tstm wind (g40)", "tstm wind 40",
        "tstm wind (41)", "tstm wind  (g45)", "tstm wind (g45)",
        "tstm wind 45", "tstm wind g45", "tstm wind 50", "tstm wind 51",
        "tstm wind 52", "tstm wind 55", "tstm wind g58", "tstm wind 65)",
        "tstm winds", "tstm wnd", "tstmw", "tunderstorm wind",
        "severe thunderstorm", "thunderstorm wind/hail", "tstm wind/hail",
        "severe thunderstorm winds", "severe thunderstorms",
        "thunderstorm wind/lightning", "thunderstorm winds/ flood",
        "thunderstorm winds/flooding", "thunderstorm winds/funnel clou",
        "thunderstorm windshail", "thunderstorm winds hail",
        "thunderstorm winds/hail", "thunderstorm winds lightning",
        "thunderstorm wind/ tree", "thunderstorm wind/ trees", "thundersnow",
        "whirlwind", "thunderstorm winds funnel clou", "thunderstorm winds g",
        "thunderstorm winds/ hail", "thunderstorm winds heavy rain",
        "thunderstorm winds/heavy rain", "thunderstorm winds small strea",
        "thunderstorm winds urban flood", "tstm heavy rain",
        "thundersnow shower", "metro storm, may 26", "downburst winds",
    ),
    "tornado": (
        "landspout", "tornado f0", "tornado f1", "tornado f2", "tornado f3",
        "tornadoes", "tornado", "tornadoes, tstm wind, hail", "torndao",
        "tornado debris", "tornados", "tornado/waterspout",
        "rotating wall cloud", "wall cloud", "wall cloud/funnel cloud",
        "large wall cloud",
    ),
    "tropical depression": (
        "tropical depression",
    ),
    "tropical storm": (
        "tropical storm alberto", "tropical storm dean",
        "tropical storm gordon", "tropical storm jerry",
    ),
    "tsunami": (
        "tsunami",
    ),
    "volcanic ash": (
        "volcanic ash", "vog", "volcanic ashfall", "volcanic ash plume",
        "volcanic eruption",
    ),
    "waterspout": (
        "water spout", "waterspout", "waterspout-", "waterspout/",
        "waterspouts", "wayterspout", "waterspout tornado",
        "waterspout-tornado", "waterspout/tornado", "waterspout/ tornado",
        " waterspout", "waterspout funnel cloud",
    ),
    "wildfire": (
        "brush fire", "brush fires", "forest fires", "grass fires",
        "wild/forest fire", "wild/forest fires", "wildfire", "wildfires",
        "wild fires",
    ),
    "winter storm": (
        "winter storms", "winter storm", "winter storm high winds",
        "winter storm/high wind", "winter storm/high winds",
    ),
    "winter weather": (
        "bitter wind chill", "bitter wind chill temperatures",
        "falling snow/ice", "ice", "black ice", "ice on road", "ice roads",
        "icy roads", "ice and snow", "ice/strong winds", "late season snow",
        "late freeze", "late season hail", "late season snowfall",
        "late-season snowfall", "late snow", "light snow", "light snowfall",
        "snow", "snow accumulation", "snow and heavy snow", "snow and ice",
        "snow/ bitter cold", "snow/blowing snow", "snow/cold",
        "snow/heavy snow", "snow/high winds", "snow/ice", "snow/ ice",
        "snow/sleet", "snow/sleet/freezing rain", "snow squall",
        "snow squalls", "winter weather", "winter weather mix",
        "winter weather/mix", "wintry mix", "moderate snow",
        "moderate snowfall", "light snow and sleet", "light snow/flurries",
        "light snow/freezing precip", "mountain snows", "winter mix",
        "wintery mix", "seasonal snowfall", "snow showers", "snowfall record",
        "snow and cold", "snow and wind", "snow\\cold", "first snow",
        "early snow", "early snowfall", "accumulated snowfall", "ice/snow",
        "patchy ice", "unusually late snow",
    ),
    # Miscellaneous labels that describe no classifiable event.
    OTHER: (
        "apache county", "excessive", "other", "?", "high", "record high",
        "record temperature", "record temperatures", "temperature record",
        "monthly precipitation", "monthly rainfall", "monthly snowfall",
        "monthly temperature", "southeast", "record low", "none",
        "lack of snow", "normal precipitation", "northern lights",
        "no severe weather", "red flag criteria", "red flag fire wx",
        "mild and dry pattern", "mild/dry pattern", "mild pattern",
    ),
    # Administrative date-range summary rows, not real events.
    SUMMARY: (
        "summary august 10", "summary august 11", "summary august 17",
        "summary august 21", "summary august 2-3", "summary august 28",
        "summary august 4", "summary august 7", "summary august 9",
        "summary jan 17", "summary july 23-24", "summary june 18-19",
        "summary june 5-6", "summary june 6", "summary: nov. 16",
        "summary: nov. 6-7", "summary: oct. 20-21", "summary: october 31",
        "summary of april 12", "summary of april 13", "summary of april 21",
        "summary of april 27", "summary of april 3rd", "summary of august 1",
        "summary of july 11", "summary of july 2", "summary of july 22",
        "summary of july 26", "summary of july 29", "summary of july 3",
        "summary of june 10", "summary of june 11", "summary of june 12",
        "summary of june 13", "summary of june 15", "summary of june 16",
        "summary of june 18", "summary of june 23", "summary of june 24",
        "summary of june 3", "summary of june 30", "summary of june 4",
        "summary of june 6", "summary of march 14", "summary of march 23",
        "summary of march 24", "summary of march 24-25", "summary of march 27",
        "summary of march 29", "summary of may 10", "summary of may 13",
        "summary of may 14", "summary of may 22", "summary of may 22 am",
        "summary of may 22 pm", "summary of may 26 am", "summary of may 26 pm",
        "summary of may 31 am", "summary of may 31 pm", "summary of may 9-10",
        "summary: sept. 18", "summary sept. 25-26", "summary september 20",
        "summary september 23", "summary september 3", "summary september 4",
    ),
}

Vocabulary = Mapping[str, Sequence[str]]


def validate_vocabulary(vocabulary: Vocabulary) -> Dict[str, Tuple[str, ...]]:
    """Check a vocabulary and return it as an ordered dict of tuples.

    Keys must be canonical event names or one of the catch-all labels, and
    each value must be a list of strings.
    """
    allowed = set(CANONICAL_EVENTS) | set(CATCH_ALL_EVENTS)
    out: Dict[str, Tuple[str, ...]] = {}
    for event, synonyms in vocabulary.items():
        if event not in allowed:
            raise VocabularyError(f"Unknown event category: {event!r}")
        if isinstance(synonyms, str) or not isinstance(synonyms, (list, tuple)):
            raise VocabularyError(f"Synonyms for {event!r} must be a list of strings")
        for s in synonyms:
            if not isinstance(s, str):
                raise VocabularyError(f"Non-string synonym under {event!r}: {s!r}")
        out[event] = tuple(synonyms)
    return out


def load_vocabulary(path: str) -> Dict[str, Tuple[str, ...]]:
    """Load an alternate vocabulary from a JSON object {event: [labels...]}."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise VocabularyError(f"Vocabulary file must hold a JSON object: {path}")
    return validate_vocabulary(data)


def dump_vocabulary(vocabulary: Vocabulary, path: str) -> None:
    """Write a vocabulary as JSON, keeping category order."""
    payload = {event: list(synonyms) for event, synonyms in vocabulary.items()}
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
