"""
Target niches for chainsaw parts and cutting-system distribution.
"""
from typing import Optional

from ..models.niche import Niche


NICHES: tuple[Niche, ...] = (
    Niche(
        id="dealer_specialist",
        name="1. Dealer Especialista con Taller",
        description=(
            "Centros de servicio técnico y reparación. Buscan consumibles "
            "(cadenas, barras), refacciones y herramientas de afilado."
        ),
        priority="ALTA",
        priority_states=("Durango", "Chihuahua", "Michoacán", "Jalisco", "Guerrero", "Chiapas"),
        scian_codes=("433210", "811310"),
        keywords=(
            "Refacciones para motosierras profesionales",
            "Taller de afilado de cadenas",
            "Venta de barras para motosierra",
            "Sprocket y piñones para motosierra",
            "Reparación de equipos de corte",
            "Mantenimiento de sistemas de corte",
            "Distribuidor de refacciones forestales",
            "Accesorios para motosierras de gasolina",
            "Especialistas en motores de 2 tiempos",
            "Taller mecánico de herramientas forestales",
            "Venta de limas y accesorios de afilado",
        ),
        negative_keywords=("home depot", "lowes", "walmart", "truper", "pretul"),
    ),
    Niche(
        id="field_contractor",
        name="2. Operador de Batalla (Contratista)",
        description=(
            "Contratistas de campo, poda técnica y despeje de vías. Compran "
            "por volumen cadenas, barras y equipo de seguridad."
        ),
        priority="ALTA",
        priority_states=("Veracruz", "Puebla", "Oaxaca", "Tabasco", "Quintana Roo"),
        scian_codes=("113310", "561730"),
        keywords=(
            "Contratista de aprovechamiento forestal",
            "Mantenimiento de derechos de vía CFE",
            "Servicios de desmonte y tala",
            "Empresa de poda de altura",
            "Control de vegetación industrial",
            "Limpieza de brechas cortafuego",
            "Cosecha de madera industrial",
            "Suministro de equipo de seguridad forestal",
            "Proveedores de consumibles de corte",
            "Cuadrillas de tala y despeje",
        ),
        negative_keywords=("jardinería residencial", "diseño de jardines", "vivero"),
    ),
    Niche(
        id="regional_wholesaler",
        name="3. Multiplicador de Capilaridad (Mayoreo)",
        description=(
            "Mayoristas regionales que abastecen ferreterías rurales. Buscan "
            "sistemas de corte como refacción agrícola."
        ),
        priority="MEDIA",
        priority_states=("Guanajuato", "Querétaro", "Coahuila", "Nuevo León", "San Luis Potosí"),
        scian_codes=("432110",),
        keywords=(
            "Mayoreo de refacciones agrícolas",
            "Distribuidora de accesorios para motosierras",
            "Venta al por mayor de barras y cadenas",
            "Proveedor de refacciones para el campo",
            "Distribuidor de implementos de corte",
            "Mayoreo de equipo de protección personal agrícola",
            "Suministros para ferreterías rurales",
            "Importadora de refacciones forestales y agrícolas",
        ),
        negative_keywords=("tractores", "agroquímicos", "fertilizantes"),
    ),
)


def get_niche(niche_id: Optional[str]) -> Optional[Niche]:
    """Look up a niche by id. Unknown or empty ids yield None."""
    if not niche_id:
        return None
    return next((n for n in NICHES if n.id == niche_id), None)
