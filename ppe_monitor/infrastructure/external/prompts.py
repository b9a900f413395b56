"""Default prompts sent to the vision gateway, keyed by response format."""

SYSTEM_PROMPT = (
    "Eres un analista experto en seguridad industrial. "
    "Devuelve SIEMPRE JSON válido sin texto adicional."
)

DETAILED_PROMPT = """Analiza esta imagen y detecta equipos de protección personal de construcción. Identifica específicamente: cascos de seguridad, chalecos reflectivos, botas de seguridad, orejeras de seguridad, mascarillas, gafas de seguridad, y guantes de protección.

Responde ÚNICAMENTE en formato JSON válido con esta estructura exacta:
{
  "equipos_detectados": {
    "casco": { "detectado": true/false, "confianza": 0-100 },
    "chaleco": { "detectado": true/false, "confianza": 0-100 },
    "botas": { "detectado": true/false, "confianza": 0-100 },
    "orejeras": { "detectado": true/false, "confianza": 0-100 },
    "mascarilla": { "detectado": true/false, "confianza": 0-100 },
    "gafas": { "detectado": true/false, "confianza": 0-100 },
    "guantes": { "detectado": true/false, "confianza": 0-100 }
  },
  "confianza_general": 0-100,
  "observaciones": "descripción de lo observado"
}
No incluyas explicaciones adicionales, solo el JSON."""

TEXT_PROMPT = """Analiza esta imagen y detecta los siguientes equipos de protección personal (EPP):
- Casco de seguridad
- Chaleco reflectivo o de alta visibilidad
- Botas de seguridad
- Orejeras o protección auditiva
- Mascarilla o protección respiratoria

Responde en español con el siguiente formato:
EPP DETECTADOS:
- [lista de EPP encontrados]

EPP FALTANTES:
- [lista de EPP que no se detectaron]

NIVEL DE CONFIANZA: X%

OBSERVACIONES ADICIONALES:
[cualquier observación relevante sobre la seguridad]"""
