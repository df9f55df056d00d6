"""Bookends publication properties.

Bookends has a fixed set of named fields plus twenty ``userN`` slots; most
canonical fields without a Bookends counterpart are dropped. Item types are
stored by their display name.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bibsync.domain.translation.dictionary import Dictionary, TypeMap
from bibsync.domain.translation.rules import Compute
from bibsync.domain.translation.transforms import (
    combine_volume,
    issue_without_volume,
    join_lines,
    split_lines,
    split_volume,
)

if TYPE_CHECKING:
    from bibsync.domain.types import RecordView

DEFAULT_TYPE = "Journal article"
KEY_FIELD = "user1"

BOOKENDS_TYPES = (
    "Artwork",
    "Audiovisual material",
    "Book",
    "Book chapter",
    "Conference proceedings",
    "Dissertation",
    "Edited book",
    "Editorial",
    "In press",
    "Journal article",
    "Letter",
    "Map",
    "Newspaper article",
    "Patent",
    "Personal communication",
    "Review",
    "Internet",
)

TYPES_FROM_CANONICAL = TypeMap(
    {
        "abstract": False,
        "audiovisual": "Audiovisual material",
        "audio": "Audiovisual material",
        "journalArticle": "Journal article",
        "artwork": "Artwork",
        "blogPost": "Internet",
        "book": "Book",
        "bookSection": "Book chapter",
        "software": False,
        "proceedings": "Conference proceedings",
        "paper": "Conference proceedings",
        "dictionaryEntry": "Book chapter",
        "dissertation": "Dissertation",
        "document": "Book",
        "editorial": "Editorial",
        "collection": "Edited book",
        "earticle": "Journal article",
        "internet": "Internet",
        "encyclopediaArticle": "Book chapter",
        "email": "Personal communication",
        "equation": False,
        "figure": False,
        "generic": False,
        "government": False,
        "grant": False,
        "hearing": False,
        "interview": "Journal article",
        "inpress": "In press",
        "journal": "Book",
        "legal": False,
        "letter": "Letter",
        "note": "Letter",
        "manuscript": "Book",
        "map": "Map",
        "magazineArticle": "Journal article",
        "movie": "Audiovisual material",
        "multimedia": "Internet",
        "music": False,
        "newspaperArticle": "Newspaper article",
        "podcast": "Internet",
        "pamphlet": "Letter",
        "patent": "Patent",
        "personal": "Personal communication",
        "radioBroadcast": "Audiovisual material",
        "presentation": False,
        "report": "Journal article",
        "review": "Review",
        "slide": False,
        "statute": False,
        "thesis": "Dissertation",
        "tvBroadcast": "Audiovisual material",
        "video": "Audiovisual material",
        "webpage": "Internet",
    },
    default=DEFAULT_TYPE,
)

TYPES_TO_CANONICAL = TypeMap(
    {
        "Audiovisual material": "video",
        "Journal article": "journalArticle",
        "Artwork": "artwork",
        "Internet": "webpage",
        "Book": "book",
        "Book chapter": "bookSection",
        "Conference proceedings": "proceedings",
        "Dissertation": "thesis",
        "Editorial": "editorial",
        "Edited book": "collection",
        "Personal communication": "personal",
        "In press": "inpress",
        "Letter": "pamphlet",
        "Map": "map",
        "Newspaper article": "newspaperArticle",
        "Patent": "patent",
        "Review": "review",
    },
    default="journalArticle",
)


def _edition_or_thesis_type(record: RecordView) -> str:
    return "thesisType" if record.get("type") == "Dissertation" else "edition"


def _issn_or_isbn(record: RecordView) -> str:
    return "issn" if record.get("type") == "Journal article" else "isbn"


# canonical fields Bookends has no slot for
_UNSUPPORTED_FIELDS = (
    "accessDate",
    "applicationNumber",
    "startPage",
    "endPage",
    "archive",
    "artworkSize",
    "assignee",
    "billNumber",
    "caseName",
    "code",
    "codeNumber",
    "codePages",
    "codeVolume",
    "committee",
    "company",
    "country",
    "court",
    "DOI",
    "dateDecided",
    "dateEnacted",
    "dictionaryTitle",
    "distributor",
    "docketNumber",
    "documentNumber",
    "encyclopediaTitle",
    "episodeNumber",
    "extra",
    "audioFileType",
    "filingDate",
    "firstPage",
    "audioRecordingFormat",
    "videoRecordingFormat",
    "forumTitle",
    "genre",
    "history",
    "issueDate",
    "issuingAuthority",
    "journalAbbreviation",
    "label",
    "programmingLanguage",
    "legalStatus",
    "legislativeBody",
    "libraryCatalog",
    "archiveLocation",
    "interviewMedium",
    "artworkMedium",
    "meetingName",
    "nameOfAct",
    "network",
    "patentNumber",
    "postType",
    "priorityNumbers",
    "proceedingsTitle",
    "programTitle",
    "publicLawNumber",
    "publicationTitle",
    "references",
    "reportType",
    "reporter",
    "reporterVolume",
    "rights",
    "runningTime",
    "scale",
    "section",
    "series",
    "seriesNumber",
    "seriesText",
    "seriesTitle",
    "session",
    "shortTitle",
    "studio",
    "subject",
    "system",
    "mapType",
    "manuscriptType",
    "letterType",
    "presentationType",
    "versionNumber",
    "websiteType",
)

FIELDS_FROM_CANONICAL: dict[str, object] = {
    **{name: False for name in _UNSUPPORTED_FIELDS},
    "id": "id",
    "itemType": Compute(
        name="type",
        content=lambda record: TYPES_FROM_CANONICAL.resolve(record.get("itemType"), record),
    ),
    "abstractNote": "abstract",
    "authors": Compute(name="authors", content=join_lines("authors")),
    "authorTranslated": "user9",
    "attachments": "attachments",
    "blogTitle": "journal",
    "bookTitle": "volume",
    "collections": "user19",
    "conferenceName": "journal",
    "callNumber": "user5",
    "date": "publicationDateString",
    "doi": "user17",
    "edition": "user2",
    "editors": Compute(name="editors", content=join_lines("editors")),
    "issue": Compute(name="volume", content=issue_without_volume),
    "isbn": "user6",
    "issn": "user6",
    "institution": "publisher",
    "journal": "journal",
    "keywords": Compute(name="keywords", content=join_lines("keywords")),
    "language": "user7",
    "place": "location",
    "notes": "notes",
    "numberOfVolumes": "user13",
    "numPages": "user13",
    "originalPublication": "user11",
    "pages": "pages",
    "publisher": "publisher",
    "pubmedId": "user18",
    "reportNumber": "volume",
    "reprintEdition": "user12",
    "title": "title",
    "title2": "title2",
    "titleTranslated": "user10",
    "translators": Compute(name="user3", content=join_lines("translators")),
    "url": "url",
    "university": "publisher",
    "websiteTitle": "journal",
    "volume": Compute(name="volume", content=combine_volume),
    "thesisType": "user2",
    "version": "user20",
}

FIELDS_TO_CANONICAL: dict[str, object] = {
    "id": False,
    "uniqueID": Compute(
        name=False, content=lambda record: {"bookends-uniqueId": record.get("uniqueID")}
    ),
    "type": Compute(
        name="itemType",
        content=lambda record: TYPES_TO_CANONICAL.resolve(record.get("type"), record),
    ),
    KEY_FIELD: Compute(name=False, content=lambda record: {"citationKey": record.get(KEY_FIELD)}),
    "user20": "version",
    "abstract": "abstractNote",
    "authors": Compute(name="authors", content=split_lines("authors")),
    "user9": "authorTranslated",
    "editors": Compute(name="editors", content=split_lines("editors")),
    "attachments": "attachments",
    "journal": "journal",
    "user5": "callNumber",
    "thedate": "date",
    "publicationDateString": "date",
    "user17": "doi",
    "user2": _edition_or_thesis_type,
    "user6": _issn_or_isbn,
    "publisher": "publisher",
    "keywords": Compute(name="keywords", content=split_lines("keywords")),
    "user7": "language",
    "location": "place",
    "notes": "notes",
    "user13": "numPages",
    "user11": "originalPublication",
    "pages": "pages",
    "user18": "pubmedId",
    "user12": "reprintEdition",
    "title": "title",
    "title2": "title2",
    "user10": "titleTranslated",
    "user3": Compute(name="translators", content=split_lines("user3")),
    "url": "url",
    "user4": False,
    "user8": False,
    "user14": False,
    "user15": False,
    "user16": False,
    "user19": "collections",
    "volume": Compute(name=False, content=split_volume),
}

BOOKENDS = Dictionary.build(
    "bookends",
    fields_to_canonical=FIELDS_TO_CANONICAL,
    fields_from_canonical=FIELDS_FROM_CANONICAL,
    types_to_canonical=TYPES_TO_CANONICAL,
    types_from_canonical=TYPES_FROM_CANONICAL,
)
