from signage.domain_core.entities.slide import Slide, CONF_KEYS

__all__ = ["Slide", "CONF_KEYS"]
