"""User-facing text for every supported locale."""

DEFAULT_LOCALE = "ko"

MESSAGES: dict[str, dict[str, str]] = {
    "ko": {
        # Page
        "title": "AI 패션 피팅",
        "subtitle": "Gemini (Nano Banana) 제공",
        "upload_person": "인물 사진 업로드",
        "upload_top": "상의 사진 업로드",
        "upload_bottom": "하의 사진 업로드",
        "click_to_upload": "클릭하여 업로드",
        "change": "변경",
        "remove_image": "이미지 제거",
        "preview_alt": "미리보기",
        "try_on": "✨ 피팅해보기",
        "generating": "생성 중...",
        # Result panel
        "idle_title": "결과 이미지",
        "idle_hint": "이미지를 업로드하고 \"피팅해보기\" 버튼을 누르세요.",
        "loading": "새로운 스타일을 생성 중입니다...",
        "failed_title": "생성 실패",
        "result_alt": "생성된 패션 피팅 이미지",
        "save": "저장하기",
        "save_label": "이미지 저장",
        # Errors
        "missing_person": "인물 사진을 업로드해주세요.",
        "missing_garment": "피팅할 의류(상의 또는 하의)를 하나 이상 업로드해주세요.",
        "missing_garment_image": "피팅할 의류 이미지를 하나 이상 업로드해주세요.",
        "unsupported_type": "PNG, JPEG, WEBP 이미지만 업로드할 수 있습니다.",
        "missing_api_key": "API 키가 설정되지 않았습니다. API_KEY 환경 변수를 설정해주세요.",
        "generation_failed": (
            "이미지 생성에 실패했습니다. 모델이 요청을 거부했을 수 있습니다. "
            "다른 이미지를 시도해 보세요."
        ),
        "no_image_generated": "응답에서 이미지가 생성되지 않았습니다.",
        "unknown_error": "알 수 없는 오류가 발생했습니다.",
        # Instruction sent to the model
        "prompt_top": "{position}번째 이미지의 상의",
        "prompt_bottom": "{position}번째 이미지의 하의",
        "prompt_joiner": "와 ",
        "prompt_body": "첫 번째 이미지에 있는 사람에게 {garments}를 자연스럽게 입혀주세요.",
        "prompt_keep": " 사람의 포즈와 배경은 첫 번째 이미지를 기준으로 최대한 유지해주세요.",
    },
    "en": {
        "title": "AI Fashion Fitting",
        "subtitle": "Powered by Gemini (Nano Banana)",
        "upload_person": "Upload a photo of a person",
        "upload_top": "Upload a top",
        "upload_bottom": "Upload a bottom",
        "click_to_upload": "Click to upload",
        "change": "Change",
        "remove_image": "Remove image",
        "preview_alt": "Preview",
        "try_on": "✨ Try it on",
        "generating": "Generating...",
        "idle_title": "Result image",
        "idle_hint": "Upload your images and press \"Try it on\".",
        "loading": "Generating a new style...",
        "failed_title": "Generation failed",
        "result_alt": "Generated fashion fitting image",
        "save": "Save",
        "save_label": "Save image",
        "missing_person": "Please upload a photo of a person.",
        "missing_garment": "Please upload at least one garment (top or bottom) to fit.",
        "missing_garment_image": "Please upload at least one garment image to fit.",
        "unsupported_type": "Only PNG, JPEG and WEBP images are supported.",
        "missing_api_key": "No API key is configured. Please set the API_KEY environment variable.",
        "generation_failed": (
            "Image generation failed. The model may have rejected the request. "
            "Please try different images."
        ),
        "no_image_generated": "The response did not contain a generated image.",
        "unknown_error": "An unknown error occurred.",
        "prompt_top": "the top from image {position}",
        "prompt_bottom": "the bottom from image {position}",
        "prompt_joiner": " and ",
        "prompt_body": "Naturally dress the person in image 1 in {garments}.",
        "prompt_keep": " Keep the person's pose and the background of image 1 as unchanged as possible.",
    },
}


def get_message(key: str, locale: str = DEFAULT_LOCALE, **kwargs) -> str:
    """Look up a message, falling back to the default locale."""
    catalog = MESSAGES.get(locale, MESSAGES[DEFAULT_LOCALE])
    text = catalog.get(key) or MESSAGES[DEFAULT_LOCALE][key]
    return text.format(**kwargs) if kwargs else text
