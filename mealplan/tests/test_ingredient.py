import unittest
from mealplan.domain.Ingredient import Ingredient
from mealplan.domain.errors import InvalidInputError


class TestIngredient(unittest.TestCase):

    def test_from_dict_round_trip(self):
        ingredient = Ingredient.from_dict({"name": "Turmeric", "quantity": 0.5, "unit": "tsp", "extra": 1})
        self.assertEqual(ingredient.name, "Turmeric")
        self.assertEqual(ingredient.quantity, 0.5)
        self.assertEqual(ingredient.to_dict(), {"name": "Turmeric", "quantity": 0.5, "unit": "tsp"})

    def test_rejects_non_positive_quantity(self):
        with self.assertRaises(InvalidInputError):
            Ingredient("Sugar", 0, "g")
        with self.assertRaises(InvalidInputError):
            Ingredient("Sugar", -3, "g")

    def test_rejects_non_numeric_quantity(self):
        for bad in ("2", None, True):
            with self.assertRaises(InvalidInputError):
                Ingredient("Sugar", bad, "g")

    def test_is_read_only(self):
        ingredient = Ingredient("Sugar", 100, "g")
        with self.assertRaises(AttributeError):
            ingredient.quantity = 150
        self.assertEqual(ingredient.quantity, 100)
