from .cv import CVCertificate, CVEducation, CVExperience, CVLanguage, CVPersonal, CVRecord

__all__ = [
    "CVCertificate",
    "CVEducation",
    "CVExperience",
    "CVLanguage",
    "CVPersonal",
    "CVRecord",
]
