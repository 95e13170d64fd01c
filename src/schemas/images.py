from pydantic import AliasChoices, BaseModel, ConfigDict, Field

IMAGE_KEYS: tuple[str, ...] = ("en", "en_p", "es", "es_p", "fr", "po", "it", "de")


class ImageSecrets(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    en: str = Field(validation_alias="en_image")
    en_p: str = Field(validation_alias=AliasChoices("en_p_image", "en_image_p"))
    es: str = Field(validation_alias="es_image")
    es_p: str = Field(validation_alias=AliasChoices("es_p_image", "es_image_p"))
    fr: str = Field(validation_alias="fr_image")
    po: str = Field(validation_alias="po_image")
    it: str = Field(validation_alias="it_image")
    de: str = Field(validation_alias="de_image")

    def as_sources(self) -> dict[str, str]:
        return {key: getattr(self, key) for key in IMAGE_KEYS}


class ImageConfigFile(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    secrets: ImageSecrets
