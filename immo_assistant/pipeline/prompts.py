"""Prompt templates for each dialogue state, plus the analysis schema."""

from __future__ import annotations

from typing import Any

from immo_assistant.services.market import MarketReference

SYSTEM_PROMPT = """Tu es un assistant IA expert en investissement immobilier locatif en France.

**Ton rôle :**
- Conseiller sur l'investissement locatif (rentabilité, choix de ville, fiscalité, financement)
- Analyser des marchés immobiliers locaux avec des données chiffrées
- Aider à choisir une ville d'investissement

**Important :**
- Toujours structurer tes réponses avec des titres (##), des listes, des tableaux markdown si pertinent
- Aérer avec des sauts de ligne entre sections
- Être concret et pédagogique
- Si l'utilisateur ne sait pas où investir, guide-le vers une ville qu'il connaît bien

**Ce que tu NE fais PAS :**
- Aide aux devoirs, rédaction générale, traduction, etc.
- Sujets hors investissement immobilier

Reste dans ton domaine d'expertise : l'investissement locatif."""

MARKET_SNAPSHOT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "analysis": {
            "type": "string",
            "description": "Analyse détaillée pour investissement locatif",
        },
        "price_m2_avg": {
            "type": "number",
            "description": "Prix moyen au m² si disponible",
        },
        "rent_m2_avg": {
            "type": "number",
            "description": "Loyer moyen au m² si disponible",
        },
        "gross_yield": {
            "type": "number",
            "description": "Rendement brut estimé en pourcentage",
        },
        "best_neighborhoods": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Meilleurs quartiers identifiés",
        },
        "recommendations": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Recommandations concrètes",
        },
    },
    "additionalProperties": True,
}


def locality_label(city: str, arrondissement: int | None = None) -> str:
    if arrondissement:
        return f"{city} {arrondissement}e arrondissement"
    return city


def _framed(body: str) -> str:
    return f"{SYSTEM_PROMPT}\n\n{body}"


def off_topic_prompt(message: str) -> str:
    """Short reply, then a reminder of the assistant's field."""
    return _framed(
        "L'utilisateur te parle mais ne semble pas poser une question sur l'investissement locatif.\n"
        "Réponds brièvement et naturellement, puis rappelle ton domaine d'expertise.\n\n"
        f'Message utilisateur : "{message}"'
    )


def ask_city_prompt(message: str) -> str:
    return _framed(
        "L'utilisateur s'intéresse à l'investissement locatif mais n'a pas encore précisé de ville.\n\n"
        "**Ta mission :**\n"
        "1. Réponds d'abord à sa question de manière générale et utile\n"
        "2. Propose-lui de l'aider à choisir une ville d'investissement\n"
        "3. Conseil important : suggère d'investir dans une ville qu'il connaît bien (proximité, réseau local)\n"
        "4. Donne 2-3 exemples de villes attractives pour investir (grandes et moyennes villes)\n\n"
        "Structure ta réponse avec des titres markdown (##) et aère bien.\n\n"
        f'Question utilisateur : "{message}"'
    )


def ask_arrondissement_prompt(message: str, city: str) -> str:
    return _framed(
        f"L'utilisateur vise **{city}** pour investir mais n'a pas précisé l'arrondissement.\n\n"
        "Réponds de manière structurée :\n"
        "- Explique brièvement pourquoi l'arrondissement est important\n"
        "- Demande quel arrondissement l'intéresse\n"
        "- Donne 2-3 exemples d'arrondissements attractifs pour investir\n\n"
        f'Message utilisateur : "{message}"'
    )


def ask_postal_code_prompt(message: str, city: str, arrondissement: int | None = None) -> str:
    return _framed(
        f"L'utilisateur vise **{locality_label(city, arrondissement)}** "
        "mais je n'ai pas trouvé automatiquement le code postal.\n\n"
        "Demande-lui le code postal de manière naturelle et concise, "
        "avec 1 exemple de format (ex : 33000).\n\n"
        f'Message utilisateur : "{message}"'
    )


def market_analysis_prompt(message: str, reference: MarketReference) -> str:
    """Mission prompt for the full analysis; paired with MARKET_SNAPSHOT_SCHEMA."""
    locality = locality_label(reference.city, reference.arrondissement)
    return _framed(
        f"**Mission :** Analyse approfondie du marché immobilier de **{locality}** ({reference.postal_code})\n\n"
        f"**Source de données :** {reference.locator_url}\n\n"
        "**Analyse attendue :**\n\n"
        "## 📊 Données du marché\n"
        "- Prix moyen au m² (appartement et maison si dispo)\n"
        "- Loyer moyen au m² \n"
        "- Rendement brut estimé : (loyer_m2 * 12 / prix_m2) * 100\n\n"
        "## 🏘️ Meilleurs quartiers\n"
        "- Identifie les quartiers les plus intéressants pour investir\n"
        "- Explique pourquoi (prix, demande locative, évolution)\n\n"
        "## 💡 Recommandations\n"
        "- 3 conseils concrets et actionnables\n"
        "- Type de bien à privilégier\n"
        "- Points de vigilance\n\n"
        "**Format de réponse :**\n"
        "- Place la réponse complète, déjà mise en forme, dans le champ `analysis`\n"
        "- Structure avec titres markdown (##)\n"
        "- Tableaux si pertinent pour comparer des données\n"
        "- Listes à puces\n"
        "- Aération entre sections\n"
        "- Emojis pour clarté\n\n"
        f'Question utilisateur : "{message}"'
    )
