"""
Input masks for fixed-format fields (phone, CPF, birth date, CEP).
A mask is a literal-and-placeholder pattern: '9' accepts one digit, anything else is a literal.
"""
DIGIT = "9"
ASCII_DIGITS = frozenset("0123456789")

PHONE_MASK = "(99) 99999-9999"
CPF_MASK = "999.999.999-99"
DATE_MASK = "99/99/9999"
CEP_MASK = "99999-999"

FIELD_MASKS: dict[str, str] = {
    "telefone": PHONE_MASK,
    "cpf": CPF_MASK,
    "nascimento": DATE_MASK,
    "cep": CEP_MASK,
}


def apply_mask(mask: str, raw: str) -> str:
    """
    Lay the digits of `raw` into `mask`.
    Literals are emitted only when a digit follows them, so partial input stays short:
    apply_mask("99/99/9999", "0102") -> "01/02".
    """
    digits = [c for c in raw if c in ASCII_DIGITS]
    if not digits:
        return ""
    out: list[str] = []
    pending: list[str] = []
    it = iter(digits)
    for slot in mask:
        if slot != DIGIT:
            pending.append(slot)
            continue
        d = next(it, None)
        if d is None:
            break
        out.extend(pending)
        pending = []
        out.append(d)
    return "".join(out)


def mask_field(field: str, value: str) -> str:
    """Apply the field's registered mask; unmasked fields pass through unchanged."""
    mask = FIELD_MASKS.get(field)
    if mask is None or value is None:
        return value
    return apply_mask(mask, value)
