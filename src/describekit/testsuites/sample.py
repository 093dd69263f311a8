from ..tree import Case, Group, GroupKind, Hook, HookKind

def _passes() -> None:
    pass

def _fails() -> None:
    assert 1 + 1 == 3, "expected arithmetic to be broken"

def _errors() -> None:
    raise RuntimeError("connection refused")

def discover() -> Group:
    cart = Group("cart", children=(
        Group("empty", GroupKind.WHEN, children=(
            Case("has no items", _passes),
            Case("rejects checkout", _fails),
        )),
        Group("holding an expired coupon", GroupKind.WHEN, children=(
            Case("applies the discount", _errors),
            Case("warns the shopper"),
            Case("recalculates tax", _passes, skipped=True),
        ), hooks=(Hook(HookKind.BEFORE_EACH, _passes, "load coupon"),)),
    ))
    return Group("", children=(cart,))
