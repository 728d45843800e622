"""Option resolution for select fields"""

from collections.abc import Mapping

from schemas.quick_edit_field import QuickEditField, SupplierOptions


def resolve_options(field: QuickEditField) -> dict:
    """
    Resolve the value => label pairs of a field.

    Suppliers are called on every resolution; results are never cached.
    Anything that is not a mapping resolves to an empty dict.
    """
    source = field.options

    if isinstance(source, SupplierOptions):
        options = source.supplier()
    else:
        options = source.choices

    return dict(options) if isinstance(options, Mapping) else {}
