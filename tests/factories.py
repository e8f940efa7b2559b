"""factory_boy factories for the engine's value types."""

import factory

from tagging.models import (
    AttributeValue,
    CustomAttribute,
    GenerationContext,
    TaggingSettings,
)


class CustomAttributeFactory(factory.Factory):
    class Meta:
        model = CustomAttribute

    name = "Pen"
    values = factory.LazyFunction(lambda: ["North", "South"])
    required = False
    sort_order = factory.Sequence(lambda n: n)


class TaggingSettingsFactory(factory.Factory):
    class Meta:
        model = TaggingSettings

    method = "basic"
    numbering_system = "sequential"
    tag_prefix = "COW"
    custom_format = "{PREFIX}-{NUMBER:3}"
    barcode_type = "code128"
    barcode_length = 8
    padding_zeros = True
    include_check_digit = False
    next_number = 1
    sequence_padding = 3
    custom_attributes = factory.LazyFunction(list)

    class Params:
        custom = factory.Trait(numbering_system="custom", method="structured")
        ean13 = factory.Trait(
            numbering_system="barcode", barcode_type="ean13",
            barcode_length=13, tag_prefix="123", include_check_digit=True,
        )
        upc = factory.Trait(
            numbering_system="barcode", barcode_type="upc",
            barcode_length=12, tag_prefix="0", include_check_digit=True,
        )


class GenerationContextFactory(factory.Factory):
    class Meta:
        model = GenerationContext

    animal_source = "newborn_calf"
    animal_data = factory.LazyFunction(
        lambda: {"breed": "holstein", "gender": "female", "production_status": "heifer"}
    )
    custom_attributes = factory.LazyFunction(list)


def attribute_value(name, value):
    return AttributeValue(name=name, value=value)
