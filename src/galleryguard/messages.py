"""Localized notices shown over protected images."""

from dataclasses import dataclass

from galleryguard.config import get_protection_locale


@dataclass(frozen=True)
class ProtectionNotices:
    obscured_title: str
    obscured_hint: str
    screenshot_blocked: str
    image_unavailable: str
    image_position: str  # format with index and total
    image_dimensions: str  # format with width and height
    previous: str
    next: str
    gallery_not_found: str


NOTICES = {
    "en": ProtectionNotices(
        obscured_title="🔒 Protected image",
        obscured_hint="Return to this tab to view",
        screenshot_blocked="⛔ Screen capture blocked",
        image_unavailable="No image available",
        image_position="Image {index} of {total}",
        image_dimensions="Dimensions: {width} x {height}px",
        previous="Previous",
        next="Next",
        gallery_not_found="The gallery you are looking for does not exist or has expired.",
    ),
    "pt": ProtectionNotices(
        obscured_title="🔒 Imagem protegida",
        obscured_hint="Retorne à aba para visualizar",
        screenshot_blocked="⛔ Captura de tela bloqueada",
        image_unavailable="Nenhuma imagem disponível",
        image_position="Imagem {index} de {total}",
        image_dimensions="Dimensões: {width} x {height}px",
        previous="Anterior",
        next="Próxima",
        gallery_not_found="A galeria que você está procurando não existe ou expirou.",
    ),
}


def get_notices(locale: str | None = None) -> ProtectionNotices:
    """Notices for a locale, falling back to English."""
    return NOTICES.get(locale or get_protection_locale(), NOTICES["en"])
