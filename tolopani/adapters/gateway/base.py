from typing import List

# Indonesian Sign Language -> Bahasa Indonesia
TRANSLATE_PROMPT = (
    "Terjemahkan gestur bahasa isyarat Indonesia dalam gambar ini ke dalam teks Bahasa Indonesia. "
    "Berikan hanya teks terjemahannya, tanpa penjelasan tambahan. "
    "Jika isyarat tidak jelas, kembalikan string kosong."
)

SUMMARY_PROMPT = (
    'Dari kumpulan kata hasil terjemahan bahasa isyarat berikut: "{text}", '
    "rangkailah menjadi satu kalimat yang utuh dan paling masuk akal dalam Bahasa Indonesia. "
    "Berikan hanya kalimat lengkapnya."
)


def build_summary_prompt(phrases: List[str]) -> str:
    return SUMMARY_PROMPT.format(text=" ".join(phrases))


class InferenceGateway:
    ready = False

    def translate_image(self, image_bytes: bytes) -> str:
        """JPEG bytes -> translated text ("" when the gesture is unclear). Raises GatewayError."""
        raise NotImplementedError

    def summarize(self, phrases: List[str]) -> str:
        """Ordered phrases -> one sentence. Raises GatewayError."""
        raise NotImplementedError
