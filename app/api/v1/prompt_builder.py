from app.api.v1.profiles import GenerationProfile
from app.schemas.analysis import PetInfo

NOT_SPECIFIED = "Belirtilmemiş"


def _text(value) -> str:
    # JSON spelling for booleans, e.g. a form that sent "name": true
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _or_unspecified(value) -> str:
    # 0, false and "" count as missing, same as an absent key
    if value is None or value is False or value == "" or value == 0:
        return NOT_SPECIFIED
    return _text(value)


def _format_weight(weight) -> str:
    text = _or_unspecified(weight)
    if text == NOT_SPECIFIED:
        return text
    # callers send either 12 or "12 kg"
    return text if text.lower().endswith("kg") else f"{text} kg"


def build_prompt(notes: str, pet_info: PetInfo, profile: GenerationProfile) -> str:
    """
    Interpolate the pet details and free-text notes into the profile's template.
    """
    return profile.template.format(
        name=_or_unspecified(pet_info.name),
        species=_or_unspecified(pet_info.species),
        breed=_or_unspecified(pet_info.breed),
        age=_or_unspecified(pet_info.age),
        weight=_format_weight(pet_info.weight),
        notes=notes,
    )
