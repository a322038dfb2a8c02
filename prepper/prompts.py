from prepper.models import ChatContext


PREAMBLE = """
You are Prepper, a friendly and practical cooking assistant helping a home cook
plan their meals for the week.
Keep answers short and concrete. Prefer lists over long paragraphs.
Only suggest ingredients that are easy to find in a regular supermarket.""".strip()

RECIPE = """
The user is currently looking at this recipe:

Title: {title}
Cuisine: {cuisine}
Estimated calories: {calories} per serving
Preparation: {prep} minutes, cooking: {cook} minutes
Ingredients:
{ingredients}

Answer questions about this recipe first.
When suggesting changes, keep the dish recognisable."""

PREFERENCES = """
The user follows these dietary preferences: {preferences}.
Never suggest anything that breaks them."""

AVOID = """
The user wants to avoid these ingredients: {avoid}.
Offer substitutes whenever a recipe uses one of them."""


class ChatPrompt:
    """System prompt for the completion service, built from the chat context."""

    def __init__(self, context: ChatContext, preamble: str = PREAMBLE) -> None:
        self.context = context
        self.preamble = preamble

    def _recipe(self) -> str:
        recipe = self.context.recipe
        if recipe is None:
            return ""
        ingredients = "\n".join(
            f"- {i.name} ({i.amount})" if i.amount else f"- {i.name}"
            for i in recipe.ingredients
        )
        cuisine = " / ".join(p for p in (recipe.area, recipe.category) if p)
        return RECIPE.format(
            title=recipe.title,
            cuisine=cuisine or "unknown",
            calories=recipe.calories,
            prep=recipe.prep_minutes,
            cook=recipe.cook_minutes,
            ingredients=ingredients or "- (none listed)",
        )

    def _preferences(self) -> str:
        described = self.context.preferences.describe()
        if not described:
            return ""
        return PREFERENCES.format(preferences=", ".join(described))

    def _avoid(self) -> str:
        if not self.context.avoid_ingredients:
            return ""
        return AVOID.format(avoid=", ".join(self.context.avoid_ingredients))

    def __str__(self) -> str:
        parts = [self.preamble, self._recipe(), self._preferences(), self._avoid()]
        return "\n".join(p for p in parts if p)


SUBSTITUTE_REPLY = """
Here are some common swaps that work well in "{title}":

- Butter: olive oil or a plant-based spread (use about 3/4 of the amount)
- Cream: Greek yogurt or blended cashews for a lighter, creamy finish
- Eggs: 1 tbsp ground flaxseed mixed with 3 tbsp water per egg when baking
- Meat: mushrooms, lentils or chickpeas keep the dish hearty
- Fresh herbs: use a third of the amount in dried herbs

Tell me which ingredient you want to replace and I can be more specific.""".strip()

CALORIE_REPLY = """
"{title}" comes in at roughly {calories} calories per serving. To make it lighter:

- Cut the oil or butter in half and cook in a non-stick pan
- Bulk it up with extra vegetables and trim the portion of carbs
- Choose lean proteins such as chicken breast, fish or legumes
- Swap cream or cheese sauces for yogurt or tomato based ones

These changes usually save 100 to 200 calories per serving.""".strip()

WALKTHROUGH_REPLY = """
Here is how to make "{title}":

Prep takes about {prep} minutes and cooking about {cook} minutes.
You will need: {ingredients}.

1. Read through the steps and get all your ingredients ready first
2. Do the chopping and measuring before you turn on the heat
3. Follow the recipe steps in order and taste as you go

Ask me about any step if you get stuck!""".strip()

SWEET_REPLY = """
Craving something sweet? Try one of these:

- Banana pancakes with honey and berries
- Apple crumble with a spiced oat topping
- Chocolate avocado mousse
- Yogurt parfait with granola and fresh fruit

Search for any of them to add it to your plan.""".strip()

SAVORY_REPLY = """
Some savory ideas for your next meal:

- Chicken stir-fry with seasonal vegetables
- Beef and bean chili
- Baked salmon with roasted potatoes
- Spaghetti bolognese

Search for any of them to add it to your plan.""".strip()

VEGETARIAN_SAVORY_REPLY = """
Some vegetarian savory ideas for your next meal:

- Chickpea and spinach curry
- Roasted vegetable lasagne
- Black bean tacos with avocado
- Mushroom risotto

Search for any of them to add it to your plan.""".strip()

QUICK_REPLY = """
Short on time? These are ready in 30 minutes or less:

- Egg fried rice
- Pasta with garlic, chilli and olive oil
- Quesadillas with whatever is in the fridge
- Shakshuka

Search for any of them to add it to your plan.""".strip()

HEALTHY_REPLY = """
A few tips for eating well this week:

- Fill half your plate with vegetables
- Pick whole grains like brown rice, oats and wholemeal pasta
- Cook at home in batches so healthy leftovers are always ready
- Keep an eye on portion sizes rather than cutting out whole food groups
- Drink water with meals

Want me to suggest some healthy recipes?""".strip()

DEFAULT_REPLY = """
I'm your meal planning assistant. I can help you:

- Find recipes for sweet or savory cravings
- Suggest quick and easy meals
- Swap ingredients you don't have or want to avoid
- Make a recipe healthier or lower in calories
- Walk you through cooking a recipe

What would you like to cook?""".strip()
