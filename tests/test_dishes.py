from decimal import Decimal

import pytest

from restaurant_orders import (
    Beverage,
    Dessert,
    DishCategory,
    ExtraCheese,
    ExtraSauce,
    InvalidDishTypeError,
    MainCourse,
)


class TestDishFactory:

    @pytest.mark.parametrize("kind,label,dish_class", [
        ("principal", "Plato Principal", MainCourse),
        ("PRINCIPAL", "Plato Principal", MainCourse),
        ("bebida", "Bebida", Beverage),
        ("Bebida", "Bebida", Beverage),
        ("postre", "Postre", Dessert),
        ("PoStRe", "Postre", Dessert),
    ])
    def test_known_tags_any_case(self, factory, kind, label, dish_class):
        dish = factory.create_dish(kind, "Flan Casero", "3.50")

        assert isinstance(dish, dish_class)
        assert dish.get_description().startswith(label)
        assert "Flan Casero" in dish.get_description()
        assert dish.get_description() == f"{label}: Flan Casero"

    def test_unknown_tag_raises_with_tag(self, factory):
        with pytest.raises(InvalidDishTypeError) as exc_info:
            factory.create_dish("desconocido", "Mystery", "1.00")

        assert exc_info.value.dish_type == "desconocido"
        assert "desconocido" in str(exc_info.value)

    @pytest.mark.parametrize("kind", [" principal ", "bebida\n", "\tpostre"])
    def test_tag_with_surrounding_whitespace_rejected(self, factory, kind):
        with pytest.raises(InvalidDishTypeError) as exc_info:
            factory.create_dish(kind, "Pizza", "1.00")

        assert exc_info.value.dish_type == kind

    def test_invalid_dish_type_is_value_error(self, factory):
        with pytest.raises(ValueError):
            factory.create_dish("entrada", "Sopa", "4.00")

    def test_price_is_decimal(self, factory):
        assert factory.create_dish("bebida", "Agua", 2.5).get_price() == Decimal("2.5")
        assert factory.create_dish("bebida", "Agua", 2).get_price() == Decimal("2")
        assert factory.create_dish("bebida", "Agua", Decimal("1.25")).get_price() == Decimal("1.25")

    def test_negative_price_accepted_as_given(self, factory):
        assert factory.create_dish("postre", "Promo", "-1.00").get_price() == Decimal("-1.00")

    def test_name_and_category(self, factory):
        dish = factory.create_dish("principal", "Pizza Margherita", "12.50")

        assert dish.get_name() == "Pizza Margherita"
        assert dish.get_category() == DishCategory.MAIN_COURSE

    def test_supported_types(self, factory):
        assert sorted(factory.get_supported_types()) == ["bebida", "postre", "principal"]


class TestDecorators:

    def test_extra_cheese(self, factory):
        pizza = factory.create_dish("principal", "Pizza Margherita", "12.50")
        cheesy = ExtraCheese(pizza)

        assert cheesy.get_price() == Decimal("14.00")
        assert cheesy.get_description() == "Plato Principal: Pizza Margherita (con extra queso)"
        assert cheesy.get_name() == "Pizza Margherita"

    def test_extra_sauce(self, factory):
        flan = factory.create_dish("postre", "Flan Casero", "3.50")
        saucy = ExtraSauce(flan, "Caramelo")

        assert saucy.get_price() == Decimal("4.25")
        assert saucy.get_description() == "Postre: Flan Casero (con extra salsa Caramelo)"
        assert saucy.get_sauce_kind() == "Caramelo"

    def test_nested_chain_appends_in_wrap_order(self, factory):
        pizza = factory.create_dish("principal", "Pizza Margherita", "12.50")
        loaded = ExtraSauce(ExtraCheese(pizza), "Picante")

        assert loaded.get_price() == Decimal("14.75")
        assert loaded.get_description() == (
            "Plato Principal: Pizza Margherita (con extra queso) (con extra salsa Picante)"
        )
        assert loaded.get_name() == "Pizza Margherita"
        assert loaded.get_wrapped().get_wrapped() is pizza

    @pytest.mark.parametrize("wraps", [
        ["cheese", "cheese", "sauce"],
        ["sauce", "cheese", "cheese"],
        ["sauce", "sauce", "sauce", "cheese"],
        [],
    ])
    def test_surcharges_independent_of_nesting_order(self, factory, wraps):
        dish = factory.create_dish("principal", "Hamburguesa", "8.00")
        wrapped = dish
        for wrap in wraps:
            wrapped = ExtraCheese(wrapped) if wrap == "cheese" else ExtraSauce(wrapped, "BBQ")

        expected = dish.get_price() + Decimal("1.50") * wraps.count("cheese") \
            + Decimal("0.75") * wraps.count("sauce")
        assert wrapped.get_price() == expected

    def test_decoration_leaves_wrapped_dish_untouched(self, factory):
        cola = factory.create_dish("bebida", "Refresco de Cola", "2.00")
        ExtraCheese(cola)
        ExtraSauce(cola, "Limón")

        assert cola.get_price() == Decimal("2.00")
        assert cola.get_description() == "Bebida: Refresco de Cola"
