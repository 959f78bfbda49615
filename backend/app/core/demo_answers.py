"""Demo Answers — canned chat replies used while the RAG service is disabled.

Invariants:
    - Deterministic: same (disease, question) -> same answer
    - Keyword branches are matched case-insensitively on the question
    - Unknown diseases get a generic simulated answer that echoes the question
"""

from app.core.disease_catalog import normalize_condition_name

_ECZEMA_TREATMENT = (
    "**Treatment:** Keep skin moisturized with fragrance-free lotions. "
    "Avoid harsh soaps and hot water. Use topical corticosteroids as "
    "prescribed by your doctor. Consider antihistamines for severe itching."
)
_ECZEMA_CAUSES = (
    "**Causes:** Eczema is caused by a combination of genetic factors and "
    "environmental triggers including allergens, irritants, stress, and "
    "climate changes."
)
_ECZEMA_GENERAL = (
    "**General Info:** Eczema is a chronic inflammatory skin condition. "
    "Consult a dermatologist for personalized treatment."
)
_FUNGAL_TREATMENT = (
    "**Treatment:** Apply antifungal cream (clotrimazole, miconazole) twice "
    "daily for 2-4 weeks. Keep area clean and dry. Wear breathable clothing. "
    "Complete full treatment course even if symptoms improve."
)
_FUNGAL_GENERAL = (
    "**General Info:** Fungal infections are contagious. Avoid sharing "
    "personal items. If OTC treatments don't work after 2 weeks, see a doctor."
)


def _eczema(question: str) -> str:
    if "treat" in question:
        body = _ECZEMA_TREATMENT
    elif "cause" in question:
        body = _ECZEMA_CAUSES
    else:
        body = _ECZEMA_GENERAL
    return (
        "**Demo RAG Response for Eczema:**\n"
        "Based on medical documentation, here's what you should know:\n\n"
        f"{body}\n\n"
        "*Note: This is demo data. Real RAG will provide comprehensive, "
        "sourced medical information.*"
    )


def _fungal_infection(question: str) -> str:
    body = _FUNGAL_TREATMENT if "treat" in question else _FUNGAL_GENERAL
    return (
        "**Demo RAG Response for Fungal Infection:**\n\n"
        f"{body}\n\n"
        "*Note: Demo response - Real RAG will provide detailed, evidence-based "
        "answers with sources.*"
    )


_RESPONDERS = {
    "eczema": _eczema,
    "fungal_infection": _fungal_infection,
}


def demo_rag_response(disease: str, question: str) -> str:
    responder = _RESPONDERS.get(normalize_condition_name(disease))
    if responder:
        return responder(question.lower())
    return (
        "**Demo RAG Response:**\n\n"
        f'This is a simulated response for "{disease}".\n\n'
        f"Question: {question}\n\n"
        "*Real RAG integration coming soon - will provide comprehensive "
        "medical information from official documentation.*"
    )
