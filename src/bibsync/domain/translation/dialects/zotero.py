"""Zotero Web API item schema."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bibsync.domain.translation.dictionary import Dictionary, TypeMap
from bibsync.domain.translation.rules import DROP, Compute
from bibsync.domain.translation.transforms import (
    join_collections,
    join_creators,
    keywords_to_tags,
    notes_from_html,
    notes_to_html,
    split_collections,
    split_creators,
    tags_to_keywords,
)

if TYPE_CHECKING:
    from bibsync.domain.types import RecordView

DEFAULT_TYPE = "journalArticle"
EXCLUDED_TYPES = frozenset({"attachment", "note"})


def _book_or_collection(record: RecordView) -> str:
    creators = record.get("creators")
    if isinstance(creators, list) and any(
        isinstance(creator, dict) and creator.get("creatorType") == "editor"
        for creator in creators
    ):
        return "collection"
    return "book"


TYPES_FROM_CANONICAL = TypeMap(
    {
        "abstract": False,
        "audiovisual": False,
        "audio": "audioRecording",
        "database": "database",
        "ancient": False,
        "journalArticle": "journalArticle",
        "artwork": "artwork",
        "bill": "bill",
        "blogPost": "blogPost",
        "book": "book",
        "bookSection": "bookSection",
        "case": "case",
        "chart": False,
        "classical": False,
        "software": "computerProgram",
        "proceedings": "book",
        "paper": "conferencePaper",
        "catalog": "book",
        "data": False,
        "webdb": False,
        "dictionaryEntry": "dictionaryEntry",
        "dissertation": "thesis",
        "document": "document",
        "editorial": "newspaperArticle",
        "ebook": "book",
        "echapter": "bookSection",
        "collection": "book",
        "earticle": "journalArticle",
        "internet": "webpage",
        "encyclopediaArticle": "encyclopediaArticle",
        "email": "email",
        "equation": False,
        "figure": False,
        "generic": False,
        "government": False,
        "grant": False,
        "hearing": "hearing",
        "interview": "interview",
        "inpress": "manuscript",
        "journal": "book",
        "legal": "bill",
        "letter": "letter",
        "note": "note",
        "manuscript": "manuscript",
        "map": "map",
        "magazineArticle": "magazineArticle",
        "movie": "film",
        "multimedia": "videoRecording",
        "music": False,
        "newspaperArticle": "newspaperArticle",
        "podcast": "podcast",
        "pamphlet": "document",
        "patent": "patent",
        "personal": "letter",
        "radioBroadcast": "radioBroadcast",
        "presentation": "presentation",
        "report": "report",
        "review": "journalArticle",
        "serial": False,
        "slide": False,
        "sound": "audioRecording",
        "standard": "standard",
        "statute": "statute",
        "thesis": "thesis",
        "tvBroadcast": "tvBroadcast",
        "video": "videoRecording",
        "webpage": "webpage",
    },
    default=DEFAULT_TYPE,
)

TYPES_TO_CANONICAL = TypeMap(
    {
        "attachment": "attachment",
        "audioRecording": "audio",
        "database": "database",
        "journalArticle": "journalArticle",
        "artwork": "artwork",
        "bill": "legal",
        "blogPost": "blogPost",
        "book": _book_or_collection,
        "bookSection": "bookSection",
        "case": "case",
        "computerProgram": "software",
        "conferencePaper": "paper",
        "dictionaryEntry": "dictionaryEntry",
        "thesis": "thesis",
        "document": "pamphlet",
        "newspaperArticle": "newspaperArticle",
        "webpage": "webpage",
        "encyclopediaArticle": "encyclopediaArticle",
        "email": "email",
        "film": "movie",
        "forumPost": "internet",
        "hearing": "hearing",
        "instantMessage": "personal",
        "interview": "interview",
        "letter": "personal",
        "note": "note",
        "manuscript": "manuscript",
        "map": "map",
        "magazineArticle": "magazineArticle",
        "podcast": "podcast",
        "patent": "patent",
        "preprint": "earticle",
        "radioBroadcast": "radioBroadcast",
        "presentation": "presentation",
        "report": "report",
        "standard": "standard",
        "statute": "statute",
        "tvBroadcast": "tvBroadcast",
        "videoRecording": "video",
    },
    default=DEFAULT_TYPE,
)

# fields spelled the same way in Zotero and the canonical schema
_SHARED_FIELDS = (
    "accessDate",
    "abstractNote",
    "applicationNumber",
    "blogTitle",
    "bookTitle",
    "conferenceName",
    "callNumber",
    "date",
    "dateAdded",
    "edition",
    "issue",
    "institution",
    "language",
    "place",
    "numberOfVolumes",
    "numPages",
    "originalPublication",
    "pages",
    "publisher",
    "pubmedId",
    "reportNumber",
    "reprintEdition",
    "firstPage",
    "title",
    "titleTranslated",
    "url",
    "university",
    "websiteTitle",
    "volume",
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
    "dateDecided",
    "dateEnacted",
    "dictionaryTitle",
    "distributor",
    "docketNumber",
    "documentNumber",
    "encyclopediaTitle",
    "episodeNumber",
    "audioFileType",
    "filingDate",
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
    "thesisType",
    "mapType",
    "manuscriptType",
    "letterType",
    "presentationType",
    "versionNumber",
    "websiteType",
)

# API bookkeeping that has no meaning in another store
_BOOKKEEPING_FIELDS = (
    "version",
    "dateModified",
    "parentItem",
    "relations",
    "deleted",
    "inPublications",
    "note",
    "linkMode",
    "contentType",
    "charset",
    "filename",
    "md5",
    "mtime",
)

FIELDS_FROM_CANONICAL: dict[str, object] = {
    **{name: name for name in _SHARED_FIELDS},
    "itemType": Compute(
        name="itemType",
        content=lambda record: TYPES_FROM_CANONICAL.resolve(record.get("itemType"), record),
    ),
    "attachments": "attachments",
    "authors": Compute(name="creators", content=split_creators("author"), default=list),
    "editors": Compute(name="creators", content=split_creators("editor"), default=list),
    "translators": Compute(name="creators", content=split_creators("translator"), default=list),
    "authorTranslated": "authorTranslated",
    "collections": Compute(name="collections", content=split_collections, default=list),
    "doi": "DOI",
    "isbn": "ISBN",
    "issn": "ISSN",
    "journal": "publicationTitle",
    "publicationTitle": "publicationTitle",
    "keywords": Compute(name="tags", content=keywords_to_tags),
    "notes": Compute(name="notes", content=notes_to_html),
    "startPage": "firstPage",
    "endPage": False,
    "title2": False,
    **{f"custom{index}": False for index in range(1, 8)},
}

FIELDS_TO_CANONICAL: dict[str, object] = {
    **{name: name for name in _SHARED_FIELDS},
    **{name: False for name in _BOOKKEEPING_FIELDS},
    "key": Compute(name=False, content=lambda record: {"zotero-key": record.get("key")}),
    "itemType": Compute(
        name="itemType",
        content=lambda record: TYPES_TO_CANONICAL.resolve(record.get("itemType"), record),
    ),
    "collections": Compute(name="collections", content=join_collections),
    "creators": Compute(name=False, content=join_creators),
    "tags": Compute(name="keywords", content=tags_to_keywords),
    "DOI": "doi",
    "ISBN": "isbn",
    "ISSN": "issn",
    "publicationTitle": "journal",
    "editors": "editors",
    "notes": Compute(name="notes", content=notes_from_html),
}

ZOTERO = Dictionary.build(
    "zotero",
    fields_to_canonical=FIELDS_TO_CANONICAL,
    fields_from_canonical=FIELDS_FROM_CANONICAL,
    types_to_canonical=TYPES_TO_CANONICAL,
    types_from_canonical=TYPES_FROM_CANONICAL,
    extra_field="extra",
)
