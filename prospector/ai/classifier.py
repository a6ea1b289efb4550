"""
AI batch classifier - ask an LLM which listings fit the business.
"""
import json
import logging
import re
from typing import Any, Optional

from pydantic import BaseModel, TypeAdapter, ValidationError

from ..config import get_config
from ..errors import AIResponseParseError
from ..models.listing import Listing
from ..models.niche import Niche
from ..models.classification import AIVerdict, Verdict
from .llm_client import LLMClient


logger = logging.getLogger(__name__)


CLASSIFIER_PROMPT = """Eres el Clasificador Estratégico de MARVELSA (Comercializadora Marvel). Tu misión es identificar prospectos que encajen estrictamente con nuestra razón de ser: la comercialización de equipos para la industria AGRÍCOLA, FORESTAL, JARDINERÍA y CONSTRUCCIÓN.

## TU "RAZÓN DE SER" (MARVELSA):
Solo buscamos negocios que vendan, reparen o utilicen maquinaria de estos sectores:
1. **Agrícola/Forestal** (Tractores, motosierras, sistemas de riego, etc.).
2. **Jardinería Profesional** (Podadoras, desbrozadoras de mano, etc.).
3. **Construcción** (Maquinaria pesada, herramientas neumáticas, compresores, generadores).

## REGLA DE EXCLUSIÓN ABSOLUTA:
- **DESCARTA** cualquier negocio de **HOGAR / LÍNEA BLANCA / COCINA**.
- Si el negocio dice "Batidoras", "Licuadoras", "Cafeteras", "Estufas" o "Microondas", es IRRELEVANT. Aunque digan "Refacciones", si son refacciones de cocina, NO SON MARVELSA.

## NICHO ACTUAL DE BÚSQUEDA:
- Nombre: {niche_name}
- Descripción: {niche_description}

## NEGOCIOS A CLASIFICAR:
{business_list}

## CLASIFICACIÓN:
1. "prospect": Vende/repara herramientas eléctricas industriales, maquinaria pesada, equipo forestal o agrícola de marca profesional (STIHL, DeWalt, Makita, Cat, etc.).
2. "irrelevant": Es de otro rubro (comida, salud, hogar, ELECTRODOMÉSTICOS PEQUEÑOS de cocina) o no tiene nada que ver.
3. "uncertain": Una ferretería generalista donde hay duda de si venden marcas PRO.

Responde SOLO un JSON array:
[{{"idx":0,"verdict":"prospect","reason":"Es un distribuidor oficial de equipo forestal"}},{{"idx":1,"verdict":"irrelevant","reason":"Es reparación de electrodomésticos domésticos, no industrial"}}]"""


class VerdictEntry(BaseModel):
    """One element of the classifier's JSON array."""
    idx: int
    verdict: Verdict
    reason: str = ""


_ENTRIES = TypeAdapter(list[VerdictEntry])

_FENCE = re.compile(r"```(?:json)?\s*", re.IGNORECASE)


def strip_formatting(text: str) -> str:
    """Remove markdown code fences wrapped around a JSON payload."""
    text = text.strip()
    if text.startswith("```"):
        text = _FENCE.sub("", text).replace("```", "").strip()
    return text


def parse_verdicts(text: str, listings: list[Listing]) -> dict[str, AIVerdict]:
    """
    Parse a classifier response into verdicts keyed by listing key.

    Args:
        text: Raw model output
        listings: The listings sent, in prompt order (``idx`` positions)

    Returns:
        Verdicts keyed by listing key. Entries pointing at unknown
        positions or at listings without a key are skipped.

    Raises:
        AIResponseParseError: If the payload is not a valid verdict array;
            no verdict from the batch is returned in that case
    """
    payload = strip_formatting(text)
    try:
        data: Any = json.loads(payload)
        entries = _ENTRIES.validate_python(data)
    except (json.JSONDecodeError, ValidationError) as e:
        logger.error(f"Failed to parse AI response: {e}")
        raise AIResponseParseError(f"Error parsing AI response: {e}", raw=text) from e

    verdicts: dict[str, AIVerdict] = {}
    for entry in entries:
        if not 0 <= entry.idx < len(listings):
            logger.warning(f"AI verdict for unknown position {entry.idx} ignored")
            continue
        key = listings[entry.idx].key
        if key is None:
            logger.warning(f"AI verdict for listing without id at position {entry.idx} ignored")
            continue
        verdicts[key] = AIVerdict(verdict=entry.verdict, reason=entry.reason)

    return verdicts


class AIClassifier:
    """Classifies listings in batches through an LLM."""

    def __init__(self, llm_client: Optional[LLMClient] = None, max_batch_size: Optional[int] = None):
        self.llm_client = llm_client or LLMClient()
        self.max_batch_size = max_batch_size or get_config().classifier.max_batch_size

    def build_prompt(self, listings: list[Listing], niche: Niche) -> str:
        business_list = "\n".join(
            f'[{i}] "{listing.title}" | Tipo: {listing.type or ""} | Dir: {listing.address or ""}'
            for i, listing in enumerate(listings)
        )
        return CLASSIFIER_PROMPT.format(
            niche_name=niche.name,
            niche_description=niche.description,
            business_list=business_list,
        )

    def classify(self, listings: list[Listing], niche: Niche) -> dict[str, AIVerdict]:
        """
        Classify up to ``max_batch_size`` listings against a niche.

        Raises:
            ValueError: If listings is empty or the niche has no description
            AIResponseParseError: If the response cannot be parsed
        """
        if not listings:
            raise ValueError("No listings to classify")
        if not niche.name or not niche.description:
            raise ValueError("Niche name and description are required")

        batch = listings[: self.max_batch_size]
        logger.info(f"Classifying {len(batch)} listings for niche {niche.id}")

        text = self.llm_client.complete(self.build_prompt(batch, niche))
        verdicts = parse_verdicts(text, batch)

        logger.info(f"AI returned {len(verdicts)} verdicts")
        return verdicts
