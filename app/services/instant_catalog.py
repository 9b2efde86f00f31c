"""Static style-vibe / occasion / weather catalog for instant outfits.

Entries are ``(title, items, reasoning)``; lookups go vibe -> occasion -> condition.
"""
from __future__ import annotations

from typing import Dict, List, Tuple

Entry = Tuple[str, List[str], str]

CONDITIONS = ("Sunny", "Rainy", "Cold", "Hot")

CATALOG: Dict[str, Dict[str, Dict[str, List[Entry]]]] = {
    "Minimalist": {
        "Work": {
            "Sunny": [(
                "Crisp Professional",
                ["White button-up shirt", "Black tailored trousers", "Nude pointed-toe flats", "Simple gold watch"],
                "Clean lines and neutral tones create a polished, professional look perfect for warm office days.",
            )],
            "Rainy": [(
                "Sleek & Weather-Ready",
                ["Grey turtleneck", "Black ankle-length trousers", "Chelsea boots", "Structured black tote"],
                "Sophisticated layers keep you dry while maintaining a clean, minimal aesthetic.",
            )],
            "Cold": [(
                "Warm Monochrome",
                ["Black cashmere sweater", "Grey wool trousers", "Black leather ankle boots", "Camel coat"],
                "Luxe fabrics in neutral tones provide warmth without sacrificing minimalist elegance.",
            )],
            "Hot": [(
                "Breezy Professional",
                ["Linen blend shirt in ivory", "Wide-leg trousers in beige", "Leather sandals", "Straw tote bag"],
                "Breathable fabrics and relaxed silhouettes keep you cool while looking office-appropriate.",
            )],
        },
        "Casual": {
            "Sunny": [(
                "Effortless Weekend",
                ["White t-shirt", "Light-wash jeans", "White sneakers", "Canvas tote bag"],
                "Timeless basics create an easy, put-together look for running errands or coffee dates.",
            )],
            "Rainy": [(
                "Cozy Comfort",
                ["Grey crewneck sweatshirt", "Black joggers", "White sneakers", "Crossbody bag"],
                "Comfortable essentials that work in wet weather while keeping your minimalist vibe.",
            )],
            "Cold": [(
                "Layered Simplicity",
                ["Black turtleneck", "High-waist jeans", "White sneakers", "Long grey coat"],
                "Strategic layering keeps you warm while maintaining clean, uncluttered lines.",
            )],
            "Hot": [(
                "Summer Ease",
                ["Linen tank top", "Denim shorts", "Slide sandals", "Straw hat"],
                "Light, breathable pieces in neutral tones perfect for hot casual days.",
            )],
        },
        "Date Night": {
            "Sunny": [(
                "Understated Elegance",
                ["Black slip dress", "Strappy heeled sandals", "Gold hoop earrings", "Structured clutch"],
                "Simple sophistication with subtle details creates a memorable evening look.",
            )],
            "Rainy": [(
                "Chic Simplicity",
                ["Black midi dress", "Leather ankle boots", "Trench coat", "Small leather bag"],
                "Weather-appropriate elegance that transitions beautifully from dinner to drinks.",
            )],
            "Cold": [(
                "Refined Warmth",
                ["Turtleneck sweater dress in camel", "Knee-high boots", "Wool coat", "Delicate necklace"],
                "Cozy yet elegant pieces that keep you warm without sacrificing style.",
            )],
            "Hot": [(
                "Summer Night",
                ["Linen slip dress in off-white", "Strappy flat sandals", "Simple gold jewelry", "Woven clutch"],
                "Cool, breathable fabrics with elegant draping perfect for warm evenings.",
            )],
        },
        "Weekend": {
            "Sunny": [(
                "Relaxed Refinement",
                ["Oversized white shirt", "Linen shorts in beige", "Leather sandals", "Straw bag"],
                "Effortlessly chic pieces perfect for brunch or weekend exploring.",
            )],
            "Rainy": [(
                "Weekend Layers",
                ["Grey sweater", "Black leggings", "Chelsea boots", "Raincoat"],
                "Practical comfort with minimalist appeal for indoor weekend activities.",
            )],
            "Cold": [(
                "Cozy Weekend",
                ["Cashmere sweater", "Straight-leg jeans", "Ankle boots", "Long puffer coat"],
                "Warm essentials that keep you comfortable during cold weekend outings.",
            )],
            "Hot": [(
                "Breezy Comfort",
                ["Linen button-up", "Wide-leg shorts", "Slides", "Canvas tote"],
                "Cool, relaxed pieces for hot weekend days spent outdoors.",
            )],
        },
    },
    "Boho Chic": {
        "Casual": {
            "Sunny": [(
                "Festival Vibes",
                ["Flowy floral maxi dress", "Leather sandals", "Fringe crossbody bag", "Layered necklaces"],
                "Free-spirited pieces with bohemian flair perfect for sunny days.",
            )],
            "Rainy": [(
                "Boho Layers",
                ["Crochet top", "Wide-leg jeans", "Suede ankle boots", "Fringed vest"],
                "Textured layers create bohemian charm while keeping you dry.",
            )],
            "Cold": [(
                "Cozy Bohemian",
                ["Chunky knit sweater", "Corduroy pants", "Suede boots", "Long cardigan"],
                "Warm, textured pieces with free-spirited appeal for cold days.",
            )],
            "Hot": [(
                "Summer Wanderer",
                ["Crochet crop top", "High-waist shorts", "Gladiator sandals", "Woven bag"],
                "Breezy bohemian pieces perfect for hot summer adventures.",
            )],
        },
    },
    "Sporty": {
        "Casual": {
            "Sunny": [(
                "Athleisure Chic",
                ["Cropped hoodie", "High-waist leggings", "Running sneakers", "Baseball cap"],
                "Active-ready pieces that transition from workout to errands effortlessly.",
            )],
        },
    },
    "Edgy": {
        "Date Night": {
            "Sunny": [(
                "Rock Chic",
                ["Leather jacket", "Black skinny jeans", "Combat boots", "Band tee"],
                "Bold pieces with edge create a confident, memorable evening look.",
            )],
        },
    },
    "Classic": {
        "Work": {
            "Sunny": [(
                "Timeless Professional",
                ["Navy blazer", "White blouse", "Khaki trousers", "Loafers"],
                "Traditional pieces that never go out of style, perfect for the office.",
            )],
        },
    },
    "Romantic": {
        "Date Night": {
            "Sunny": [(
                "Dreamy Evening",
                ["Lace blouse", "Flowy midi skirt", "Strappy heels", "Pearl earrings"],
                "Feminine details create a soft, romantic look for special evenings.",
            )],
        },
    },
}


def lookup(style_vibe: str, occasion: str, condition: str) -> List[Entry]:
    return list(CATALOG.get(style_vibe, {}).get(occasion, {}).get(condition, []))


def templated(style_vibe: str, occasion: str, condition: str) -> List[Entry]:
    vibe, occ, cond = style_vibe.lower(), occasion.lower(), condition.lower()
    return [
        (
            f"{style_vibe} {occasion} Look",
            ["Comfortable top", "Well-fitted bottoms", "Appropriate footwear", "Matching accessories"],
            f"A versatile {vibe} outfit perfect for {occ} in {cond} weather.",
        ),
        (
            f"Alternative {style_vibe} Style",
            ["Statement piece", "Classic basics", "Comfortable shoes", "Simple accessories"],
            f"Another {vibe} option that works beautifully for {occ} occasions.",
        ),
        (
            f"{occasion} Essential",
            ["Layering piece", "Versatile bottoms", "Stylish footwear", "Coordinating bag"],
            f"A reliable {occ} outfit that embodies your {vibe} aesthetic.",
        ),
    ]
