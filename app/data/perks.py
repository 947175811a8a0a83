"""General perks and partner deals"""

from decimal import Decimal

from app.models import GeneralPerk, Deal, Partner

GENERAL_PERKS = [
    GeneralPerk(id=1, name="Coffee Voucher", cost=Decimal("5"), icon="coffee",
                category="Food & Drink", description="£5 off at Costa Coffee"),
    GeneralPerk(id=2, name="Gym Pass", cost=Decimal("15"), icon="dumbbell",
                category="Fitness", description="1 month free gym access"),
    GeneralPerk(id=3, name="Shopping Discount", cost=Decimal("10"), icon="shopping-bag",
                category="Shopping", description="10% off at ASOS"),
    GeneralPerk(id=4, name="Rent Discount", cost=Decimal("25"), icon="home",
                category="Housing", description="£25 off next rent payment"),
    GeneralPerk(id=5, name="Premium Perks Box", cost=Decimal("50"), icon="gift",
                category="Special", description="Mystery box of student essentials"),
    GeneralPerk(id=6, name="Entertainment Pass", cost=Decimal("20"), icon="sparkles",
                category="Entertainment", description="Cinema tickets for 2"),
]

PARTNERS = [
    Partner(
        id=1,
        name="Aldi",
        slug="aldi",
        logo="/images/partners/aldi-logo.png",
        route="/perks/aldi",
        deals=[
            Deal(id=1, title="Off-Peak Saver",
                 description="5% cashback on weekday shops", icon="percent",
                 full_description="Shop on any weekday (Mon-Fri) to get 5% cashback on your entire shop."),
            Deal(id=2, title="Study-Session Bundle",
                 description="15% off on Drinks, Snacks & Easy Meals", icon="coffee",
                 full_description="Get 15% off when you buy one item from each category: Drinks, Snacks, and Easy Meals."),
            Deal(id=3, title="Flatmate Feast Bonus",
                 description="Free pizza with £60+ spend", icon="pizza",
                 full_description="Spend over £60 in one group transaction and get a free pizza for the flat."),
            Deal(id=4, title="End-of-Loan Recipe Challenge",
                 description="Scan 3 pantry items to get a recipe and 25% off the missing ingredients.",
                 icon="chef-hat",
                 full_description="Scan 3 pantry items to get a recipe and 25% off the missing ingredients."),
            Deal(id=5, title="Fresh Start Challenge",
                 description="Buy 5 different fresh produce items on a Monday or Tuesday to get £2 cashback.",
                 icon="leaf",
                 full_description="Buy 5 different fresh produce items on a Monday or Tuesday to get £2 cashback."),
        ],
    ),
    Partner(
        id=2,
        name="Lidl",
        slug="lidl",
        logo="/images/partners/lidl-logo.png",
        route="/perks/lidl",
        deals=[
            Deal(id=1, title="Bakery Boost", description="10% off all bakery items", icon="coffee",
                 full_description="Get 10% off all bakery items when you shop at Lidl."),
            Deal(id=2, title="Snack Attack", description="Buy 2 get 1 free on snacks", icon="gift",
                 full_description="Buy 2 get 1 free on selected snacks and treats."),
            Deal(id=3, title="Weekly Saver", description="£5 off £30 weekly shop", icon="percent",
                 full_description="Spend £30 or more in a single transaction and get £5 cashback."),
        ],
    ),
    Partner(
        id=3,
        name="Morrisons",
        slug="morrisons",
        logo="/images/partners/morrisons-logo.png",
        route="/perks/morrisons",
        deals=[
            Deal(id=1, title="Meal Deal Magic", description="20% off all meal deals", icon="shopping-bag",
                 full_description="Get 20% off all meal deals when you shop at Morrisons."),
            Deal(id=2, title="Breakfast Buddy", description="Free coffee with breakfast purchase", icon="coffee",
                 full_description="Get a free coffee when you purchase any breakfast item."),
            Deal(id=3, title="Sunday Special", description="Extra student discount on Sundays", icon="percent",
                 full_description="Get an extra 10% student discount on all purchases every Sunday."),
        ],
    ),
    Partner(
        id=4,
        name="Co-op",
        slug="coop",
        logo="/images/partners/coop-logo.png",
        route="/perks/coop",
        deals=[
            Deal(id=1, title="Tuesday Treat", description="Double points every Tuesday", icon="sparkles",
                 full_description="Earn double reward points on all purchases made on Tuesdays."),
            Deal(id=2, title="Own Brand Bonus", description="15% off Co-op own-brand products", icon="percent",
                 full_description="Get 15% off all Co-op own-brand products."),
            Deal(id=3, title="Fresh Five", description="Buy 5 fresh items, get £2 cashback", icon="apple",
                 full_description="Buy 5 different fresh produce items and get £2 cashback."),
        ],
    ),
]
