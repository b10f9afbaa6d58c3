from .models import MainClassSpec, ScalarMainClass, Side, SidedMainClass


def select_main_class(spec: MainClassSpec, side: Side) -> str:
    """Return the entry point for ``side``, or an empty string if there is none."""
    if isinstance(spec, ScalarMainClass):
        return spec.name
    if isinstance(spec, SidedMainClass):
        return spec.classes.get(side.value, "")
    return ""
