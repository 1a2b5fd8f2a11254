"""Dev-only endpoints.

Endpoints:
- POST /api/dev/seed - Insert sample recipes into an empty database

Disabled (404) unless DEV_ROUTES_ENABLED=true.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import Recipe, utcnow
from ..schemas import SeedResponse
from ..settings import settings

logger = logging.getLogger("recipebook.dev")


def require_dev_routes() -> None:
    if not settings.dev_routes_enabled:
        raise HTTPException(status_code=404, detail="Not Found")


router = APIRouter(dependencies=[Depends(require_dev_routes)])


# Family recipes used to populate a fresh install
SEED_RECIPES = [
    {
        "title": "Vegetable Dip",
        "description": "A quick and easy creamy dip perfect for vegetables. Family recipe from Mom.",
        "ingredients": "1 packet Knorr Vegetable Soup Mix\n1 1/4 pints sour cream\n3 tablespoons Parmesan cheese (optional)",
        "instructions": "1. Mix all ingredients together.\n2. Chill for 2 hours before serving.",
        "prep_time_minutes": 5,
        "cook_time_minutes": 0,
        "servings": 10,
        "category": "Appetizers",
    },
    {
        "title": "Barbecue Sauce",
        "description": "A sweet and tangy homemade barbecue sauce. Family recipe from Mom.",
        "ingredients": (
            "2 cups ketchup\n1/2 cup water\n1/4 cup lemon juice\n1/4 teaspoon chili powder\n"
            "1 teaspoon celery seed\n1 teaspoon Worcestershire sauce\n1 onion, grated fine\n"
            "1 teaspoon salt\n2 cups brown sugar"
        ),
        "instructions": (
            "1. Combine all ingredients in a saucepan.\n2. Bring to a boil.\n"
            "3. Simmer about 20 minutes, or until it reaches the taste you want."
        ),
        "prep_time_minutes": 20,
        "cook_time_minutes": 20,
        "servings": 16,
        "category": "Sauces",
    },
    {
        "title": "Buckeyes",
        "description": "Classic peanut butter and chocolate candies that look like buckeye nuts.",
        "ingredients": (
            "2 pounds creamy peanut butter\n1 pound butter, room temperature\n"
            "3 pounds confectioners' sugar\n2 packages (12 ounces each) chocolate chips\n1/2 bar paraffin"
        ),
        "instructions": (
            "1. Mix peanut butter, butter and confectioners' sugar until smooth. Refrigerate.\n"
            "2. Form small balls. Refrigerate.\n3. Melt chocolate chips and paraffin together.\n"
            "4. Dip balls into chocolate. Let dry on waxed paper."
        ),
        "prep_time_minutes": 60,
        "cook_time_minutes": 15,
        "servings": 166,
        "category": "Candy",
    },
    {
        "title": "Baked Eggs for Sandwiches",
        "description": "Baked eggs for sandwiches with no flipping required. Baked in a water bath for even cooking.",
        "ingredients": "8 eggs\n1/2 teaspoon salt\n2/3 cup water\nVegetable oil spray (for pan)",
        "instructions": (
            "1. Heat oven to 300F.\n2. Whisk eggs and salt. Whisk in 2/3 cup water.\n"
            "3. Spray an 8-inch square pan with oil. Pour egg mixture into pan.\n"
            "4. Set pan into a rimmed baking sheet. Add 1 1/2 cups water to the baking sheet.\n"
            "5. Bake 35-40 minutes, or until set.\n6. Let cool 10 minutes. Cut into 4 equal pieces."
        ),
        "prep_time_minutes": 5,
        "cook_time_minutes": 40,
        "servings": 4,
        "category": "Breakfast",
    },
    {
        "title": "Pumpkin Bread",
        "description": "Classic moist pumpkin bread with warm spices, nuts, and raisins. Makes 2 loaves.",
        "ingredients": (
            "2/3 cup shortening\n2 2/3 cups sugar\n4 eggs\n1 1/3 cups pumpkin puree\n1 2/3 cups water\n"
            "3 1/3 cups flour\n2 teaspoons baking soda\n1/2 teaspoon salt\n1 1/2 teaspoons baking powder\n"
            "1 teaspoon cinnamon\n1 teaspoon cloves\n2/3 cup nuts\n2/3 cup raisins"
        ),
        "instructions": (
            "1. Cream shortening and sugar. Add eggs.\n2. Add pumpkin and water.\n"
            "3. Blend in dry ingredients.\n4. Stir in nuts and raisins.\n"
            "5. Pour into 2 greased 9 x 5 x 3-inch loaf pans.\n6. Bake at 350F for 70 minutes."
        ),
        "prep_time_minutes": 20,
        "cook_time_minutes": 70,
        "servings": 24,
        "category": "Breads",
    },
]


@router.post("/dev/seed", response_model=SeedResponse)
def seed_dev_data(db: Session = Depends(get_db)):
    """Insert the sample recipes when the recipes table is empty.

    Idempotent: any existing recipe means nothing is inserted.
    """
    existing_count = db.query(Recipe).count()
    if existing_count:
        return SeedResponse(
            recipes_created=0,
            message=f"Database already has {existing_count} recipes; nothing seeded",
        )

    for recipe_data in SEED_RECIPES:
        db.add(Recipe(**recipe_data, is_verified=True, verified_at=utcnow(), created_at=utcnow()))
    db.commit()

    logger.info(f"Seeded {len(SEED_RECIPES)} sample recipes")
    return SeedResponse(
        recipes_created=len(SEED_RECIPES),
        message=f"Created {len(SEED_RECIPES)} sample recipes",
    )
