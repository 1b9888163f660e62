"""
Quote Module - Pick banner copy for a tone/objective from static quote banks
"""

import random
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple
from loguru import logger

from modules.design_tables import Objective, Tone
from utils.exceptions import InvariantViolationError


def _freeze(bank: Dict[Tone, Dict[Objective, Tuple[str, ...]]]) -> Mapping:
    return MappingProxyType({tone: MappingProxyType(quotes) for tone, quotes in bank.items()})


QUOTE_BANK = _freeze({
    Tone.NEUTRAL: {
        Objective.AWARENESS: (
            "Discover What's New",
            "Explore Our Collection",
            "Welcome to Innovation",
            "Experience the Difference",
            "Your Journey Starts Here",
            "Quality Meets Design",
            "Elevate Your Style",
            "Where Innovation Lives",
        ),
        Objective.CONVERSION: (
            "Shop Now →",
            "Get Started Today",
            "Join Thousands of Happy Customers",
            "Start Your Journey",
            "Make It Yours",
            "Order Now & Save",
            "Try It Risk-Free",
            "Claim Your Offer →",
        ),
        Objective.SALES: (
            "Limited Time Offer",
            "Special Price Today",
            "Save Up to 50%",
            "Best Deal of the Season",
            "Exclusive Discount Inside",
            "Don't Miss Out",
            "Limited Stock Available",
            "Today Only: Special Pricing",
        ),
    },
    Tone.BOLD: {
        Objective.AWARENESS: (
            "BREAK THE MOLD",
            "DARE TO BE DIFFERENT",
            "REVOLUTIONARY DESIGN",
            "POWER UP YOUR LIFE",
            "UNLEASH YOUR POTENTIAL",
            "BOLD. BRAVE. BRILLIANT.",
            "CHANGE THE GAME",
            "FUTURE IS NOW",
        ),
        Objective.CONVERSION: (
            "ACT NOW →",
            "JOIN THE REVOLUTION",
            "MAKE YOUR MOVE",
            "SEIZE THE MOMENT",
            "TAKE ACTION TODAY",
            "GET IT NOW →",
            "DON'T WAIT",
            "START YOUR TRANSFORMATION",
        ),
        Objective.SALES: (
            "FLASH SALE: 50% OFF",
            "LIMITED TIME: ACT FAST",
            "MASSIVE SAVINGS NOW",
            "EXCLUSIVE DEAL INSIDE",
            "DON'T MISS THIS DEAL",
            "HUGE DISCOUNTS TODAY",
            "LAST CHANCE TO SAVE",
            "URGENT: LIMITED STOCK",
        ),
    },
    Tone.PLAYFUL: {
        Objective.AWARENESS: (
            "Let's Have Some Fun! 🎉",
            "Your Happy Place Awaits",
            "Life's Too Short, Shop Now!",
            "Spread the Joy ✨",
            "Good Vibes Only",
            "Make Every Day Special",
            "Because You Deserve It 💫",
            "Turn Heads, Make Smiles",
        ),
        Objective.CONVERSION: (
            "Let's Do This! →",
            "Join the Fun Party",
            "Your Adventure Starts Here",
            "Hop On Board! 🚀",
            "Make It Happen Today",
            "Say Yes to Awesome",
            "Ready? Set. Shop!",
            "Let's Make Magic Together",
        ),
        Objective.SALES: (
            "Surprise! Big Savings 🎁",
            "Treat Yourself Today",
            "Deal Alert! 🚨",
            "Save More, Smile More",
            "Your Lucky Day!",
            "Special Price Just for You",
            "Deals That Make You Smile",
            "Happy Shopping! 💰",
        ),
    },
    Tone.PREMIUM: {
        Objective.AWARENESS: (
            "Crafted for Excellence",
            "Where Luxury Meets Innovation",
            "Elevate Your Experience",
            "Timeless Elegance",
            "Sophistication Redefined",
            "Premium Quality, Unmatched",
            "Excellence in Every Detail",
            "The Art of Refinement",
        ),
        Objective.CONVERSION: (
            "Experience Excellence →",
            "Join an Exclusive Circle",
            "Indulge in Premium Quality",
            "Elevate Your Lifestyle",
            "Discover Luxury",
            "Unlock Premium Access",
            "Invest in Excellence",
            "Choose Refinement",
        ),
        Objective.SALES: (
            "Exclusive Premium Offer",
            "Limited Edition Pricing",
            "VIP Discount Available",
            "Premium at Special Price",
            "Luxury Within Reach",
            "Exclusive Savings",
            "Premium Collection Sale",
            "Elegant Savings Await",
        ),
    },
})

# Same shape as QUOTE_BANK, used when the assets look like tech/AI products
AI_THEMED_QUOTE_BANK = _freeze({
    Tone.NEUTRAL: {
        Objective.AWARENESS: (
            "Powered by AI Intelligence",
            "Where AI Meets Innovation",
            "Smart Solutions, Smarter Future",
            "AI-Driven Excellence",
            "Intelligence Redefined",
            "The Future is Intelligent",
            "AI That Understands You",
            "Next-Gen AI Technology",
        ),
        Objective.CONVERSION: (
            "Experience AI Magic →",
            "Unlock AI Potential",
            "Start Your AI Journey",
            "Join the AI Revolution",
            "Discover AI Solutions",
            "Transform with AI →",
            "AI-Powered Results",
            "Smart. Fast. Intelligent.",
        ),
        Objective.SALES: (
            "AI Technology at Best Price",
            "Limited: AI Premium Access",
            "Special AI Bundle Offer",
            "AI Solutions on Sale",
            "Exclusive AI Pricing",
            "AI Tools: Special Deal",
            "Smart Savings on AI",
            "AI Innovation Discount",
        ),
    },
    Tone.BOLD: {
        Objective.AWARENESS: (
            "AI REVOLUTION STARTS HERE",
            "POWERED BY ADVANCED AI",
            "INTELLIGENCE UNLEASHED",
            "AI THAT TRANSFORMS",
            "FUTURE-PROOF AI TECHNOLOGY",
            "BREAKTHROUGH AI INNOVATION",
            "AI-POWERED EXCELLENCE",
            "NEXT-LEVEL INTELLIGENCE",
        ),
        Objective.CONVERSION: (
            "ACTIVATE AI NOW →",
            "UNLEASH AI POWER",
            "TRANSFORM WITH AI",
            "JOIN THE AI MOVEMENT",
            "REVOLUTIONIZE YOUR WORKFLOW",
            "AI THAT DELIVERS RESULTS",
            "UPGRADE TO AI →",
            "MASTER AI TECHNOLOGY",
        ),
        Objective.SALES: (
            "AI PREMIUM: LIMITED OFFER",
            "MASSIVE AI SAVINGS NOW",
            "AI TOOLS: FLASH SALE",
            "EXCLUSIVE AI DISCOUNT",
            "AI BUNDLE: SPECIAL PRICE",
            "DON'T MISS AI DEAL",
            "AI ACCESS: TODAY ONLY",
            "URGENT: AI SALE ENDS SOON",
        ),
    },
    Tone.PLAYFUL: {
        Objective.AWARENESS: (
            "AI That Gets You! 🤖✨",
            "Smart & Fun AI Solutions",
            "AI Magic at Your Fingertips",
            "Where AI Meets Creativity",
            "Fun Meets Intelligence 🎨",
            "AI That Makes Life Easier",
            "Your AI Companion Awaits",
            "Smart Tech, Happy Life",
        ),
        Objective.CONVERSION: (
            "Try AI Magic → 🚀",
            "Join the AI Fun!",
            "Let AI Do the Work",
            "AI That Makes You Smile",
            "Start Your AI Adventure",
            "Discover AI Wonders",
            "AI Made Simple & Fun",
            "Unlock AI Superpowers",
        ),
        Objective.SALES: (
            "AI Deals That Wow! 🎁",
            "Special AI Savings",
            "AI Tools on Sale!",
            "Your AI Deal Awaits",
            "Smart Savings on AI",
            "AI Bundle: Special Price",
            "Limited AI Offer",
            "AI Magic at Best Price",
        ),
    },
    Tone.PREMIUM: {
        Objective.AWARENESS: (
            "Enterprise-Grade AI Solutions",
            "Premium AI Intelligence",
            "Sophisticated AI Technology",
            "AI Crafted for Excellence",
            "Elite AI Performance",
            "Advanced AI Capabilities",
            "Premium AI Experience",
            "AI Excellence Redefined",
        ),
        Objective.CONVERSION: (
            "Access Premium AI →",
            "Experience Elite AI",
            "Unlock Advanced AI",
            "Join Premium AI Circle",
            "Discover Enterprise AI",
            "Elevate with Premium AI",
            "Invest in AI Excellence",
            "Choose Premium AI",
        ),
        Objective.SALES: (
            "Premium AI: Special Offer",
            "Exclusive AI Pricing",
            "VIP AI Access Discount",
            "Premium AI at Best Price",
            "Limited: Premium AI Deal",
            "Elite AI: Special Savings",
            "Premium AI Bundle Sale",
            "Exclusive AI Premium Deal",
        ),
    },
})

AI_KEYWORDS = (
    "ai",
    "artificial",
    "intelligence",
    "machine learning",
    "ml",
    "neural",
    "algorithm",
    "smart",
    "automation",
    "tech",
)

PLAYFUL_EMOJIS = ("✨", "🎉", "🚀", "💫", "🎁")


def detect_ai_theme(assets: Optional[Iterable] = None, metadata: Optional[Dict] = None) -> bool:
    """
    Detect AI/tech content from asset names and metadata

    Case-insensitive substring search, so short keywords like "ai"
    also hit words that merely contain them.

    Args:
        assets: Asset dicts (or objects) with a ``name``
        metadata: Optional dict with description/title/tags

    Returns:
        True if any AI keyword appears
    """
    metadata = metadata or {}
    parts = []
    for asset in assets or []:
        name = asset.get("name") if isinstance(asset, dict) else getattr(asset, "name", None)
        parts.append(name or "")

    for key in ("description", "title", "tags"):
        value = metadata.get(key) or ""
        if isinstance(value, (list, tuple)):
            value = " ".join(str(v) for v in value)
        parts.append(str(value))

    search_text = " ".join(parts).lower()
    return any(keyword in search_text for keyword in AI_KEYWORDS)


class QuoteResolver:
    """
    Resolves banner quotes by round-robin over the static quote banks
    """

    def __init__(self, rng: Optional[random.Random] = None):
        """
        Initialize Quote Resolver

        Args:
            rng: Random source for the playful emoji (unseeded if None)
        """
        self.rng = rng or random.Random()

    def get_bank(self, tone, objective, is_ai_themed: bool = False) -> Tuple[str, ...]:
        """
        Get the candidate quotes for a tone/objective pair

        Args:
            tone: Brand tone (unknown values fall back to neutral)
            objective: Marketing objective (unknown values fall back to awareness)
            is_ai_themed: Use the AI-themed bank

        Returns:
            Tuple of candidate quotes
        """
        bank = AI_THEMED_QUOTE_BANK if is_ai_themed else QUOTE_BANK
        tone_quotes = bank.get(Tone.coerce(tone)) or bank[Tone.NEUTRAL]
        quotes = tone_quotes.get(Objective.coerce(objective)) or bank[Tone.NEUTRAL][Objective.AWARENESS]

        if not quotes:
            raise InvariantViolationError(f"Empty quote bank for {tone}/{objective}")

        return quotes

    def resolve(
        self,
        tone,
        objective,
        is_ai_themed: bool = False,
        variant_index: int = 0,
        variant_count: int = 1
    ) -> str:
        """
        Pick one quote for a variant

        The index is floor(variant_index / variant_count * n) mod n, so
        asking for n variants walks the whole bank in order.

        Args:
            tone: Brand tone
            objective: Marketing objective
            is_ai_themed: Use the AI-themed bank
            variant_index: Position of the variant (0-based)
            variant_count: Total number of variants requested

        Returns:
            Selected quote
        """
        if variant_count <= 0:
            raise InvariantViolationError(f"variant_count must be positive, got {variant_count}")

        quotes = self.get_bank(tone, objective, is_ai_themed)
        index = (variant_index * len(quotes) // variant_count) % len(quotes)
        return quotes[index]

    def generate_quotes(
        self,
        tone,
        objective,
        is_ai_themed: bool = False,
        count: int = 3
    ) -> List[str]:
        """
        Generate several quote variations

        Args:
            tone: Brand tone
            objective: Marketing objective
            is_ai_themed: Use the AI-themed bank
            count: Number of quotes

        Returns:
            List of quotes in round-robin order
        """
        if count <= 0:
            raise InvariantViolationError(f"count must be positive, got {count}")

        quotes = [
            self.resolve(tone, objective, is_ai_themed, variant_index=i, variant_count=count)
            for i in range(count)
        ]

        logger.debug(f"Generated {len(quotes)} quotes for {Tone.coerce(tone).value}/{Objective.coerce(objective).value}")

        return quotes

    def embellish(self, quote: str, tone) -> str:
        """
        Add a playful emoji half of the time

        Args:
            quote: Quote text
            tone: Brand tone (only playful is embellished)

        Returns:
            Quote, possibly with one emoji appended
        """
        if Tone.coerce(tone) is not Tone.PLAYFUL:
            return quote
        if "🎉" in quote or "✨" in quote:
            return quote

        if self.rng.random() > 0.5:
            return f"{quote} {self.rng.choice(PLAYFUL_EMOJIS)}"
        return quote
