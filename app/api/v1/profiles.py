from pydantic import BaseModel, Field
from typing import List


class SamplingConfig(BaseModel):
    temperature: float = 0.7
    max_output_tokens: int = Field(512, serialization_alias="maxOutputTokens")
    top_p: float = Field(0.8, serialization_alias="topP")
    top_k: int = Field(40, serialization_alias="topK")

    def to_generation_config(self) -> dict:
        return self.model_dump(by_alias=True)


class SafetySetting(BaseModel):
    category: str
    threshold: str


class GenerationProfile(BaseModel):
    name: str
    template: str
    sampling: SamplingConfig
    safety_settings: List[SafetySetting]
    default_action: str


# -------------------------------
# Safety filter profiles
# -------------------------------
def _block(categories, threshold="BLOCK_MEDIUM_AND_ABOVE"):
    return [SafetySetting(category=c, threshold=threshold) for c in categories]


STANDARD_SAFETY = _block([
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
])

# Clinical notes (dosages, procedures) trip the dangerous-content filter,
# so the diagnostic profile turns that one off.
CLINICAL_SAFETY = _block([
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
]) + _block(["HARM_CATEGORY_DANGEROUS_CONTENT"], threshold="BLOCK_NONE")


# -------------------------------
# Prompt templates
# -------------------------------
ANALYSIS_TEMPLATE = """Sen veteriner hekimsin. Bu hasta hakkında kısa analiz yap:

HASTA: {name} ({species}, {breed})
Yaş: {age}, Ağırlık: {weight}

GÖZLEMLER:
{notes}

Lütfen kısa analiz yap (maksimum 200 kelime):

🔍 BULGULAR:
[Önemli bulgular]

📊 DEĞERLENDIRME:
[Genel durum değerlendirmesi]

💡 ÖNERİLER:
[Kısa öneriler]

UYARI: Bu eğitim amaçlıdır, kesin teşhis değildir."""

DIAGNOSTIC_TEMPLATE = """Sen deneyimli bir veteriner hekimsin. Aşağıdaki hasta için klinik değerlendirme hazırla.

HASTA BİLGİLERİ:
- Adı: {name}
- Tür: {species}
- Irk: {breed}
- Yaş: {age}
- Ağırlık: {weight}

KLİNİK NOTLAR:
{notes}

Değerlendirmeni şu başlıklarla yaz:

🔍 KLİNİK BULGULAR:
[Notlardaki önemli bulgular]

🩺 AYIRICI TANILAR:
[Olasılık sırasına göre olası tanılar ve kısa gerekçeleri]

🧪 ÖNERİLEN TETKİKLER:
[Tanıyı netleştirecek testler]

💊 TEDAVİ YAKLAŞIMI:
[Genel tedavi seçenekleri]

⚠️ ACİL DURUM İŞARETLERİ:
[Sahibin dikkat etmesi gereken belirtiler]

UYARI: Bu değerlendirme yardımcı amaçlıdır, kesin teşhis için muayene gereklidir."""

DRUG_EXTRACTION_TEMPLATE = """Aşağıdaki veteriner notlarında geçen ilaç isimlerini çıkar.

HASTA: {name} ({species}, {breed})

NOTLAR:
{notes}

Sadece ilaç isimlerini, her satıra bir tane olacak şekilde listele. Doz veya açıklama ekleme.
Notlarda ilaç yoksa yalnızca "İlaç bulunamadı" yaz."""


PROFILES = {
    "analysis": GenerationProfile(
        name="analysis",
        template=ANALYSIS_TEMPLATE,
        sampling=SamplingConfig(temperature=0.7, max_output_tokens=512, top_p=0.8, top_k=40),
        safety_settings=STANDARD_SAFETY,
        default_action="analyze",
    ),
    "diagnostic": GenerationProfile(
        name="diagnostic",
        template=DIAGNOSTIC_TEMPLATE,
        sampling=SamplingConfig(temperature=0.7, max_output_tokens=800, top_p=0.95, top_k=40),
        safety_settings=CLINICAL_SAFETY,
        default_action="diagnose",
    ),
    "drug_extraction": GenerationProfile(
        name="drug_extraction",
        template=DRUG_EXTRACTION_TEMPLATE,
        sampling=SamplingConfig(temperature=0.7, max_output_tokens=200, top_p=0.8, top_k=40),
        safety_settings=STANDARD_SAFETY,
        default_action="extract_drugs",
    ),
}


def get_profile(name: str) -> GenerationProfile:
    try:
        return PROFILES[name]
    except KeyError:
        raise ValueError(f"Unknown analysis profile: {name}")
