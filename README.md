# engconvert

Convert the language files of the Impressions Games citybuilding games to
and from XML, so that they can be edited with any text editor and turned
back into game files afterwards.

Two kinds of ENG file are supported, and the kind is detected automatically:

- **text files** (the game's strings), written to XML as `<strings>` with
  numbered `<group>` and `<string>` elements;
- **message files** (the in-game messages), written to XML as `<messages>`
  with one `<message>` element per entry.

## Installation

```
pip install .
```

## Command line

Convert an ENG file to XML:

```
engconvert eng-to-xml c3.eng c3.xml
```

Convert an edited XML file back to ENG:

```
engconvert xml-to-eng c3.xml c3.eng
```

If the output path is left out, it is derived from the input path by
replacing its last four characters (the extension) with `.xml` or `.eng`.

The text encoding of the strings is chosen with `-e`/`--encoding`:

| Value          | Description      |
|----------------|------------------|
| `Windows-1252` | Default          |
| `Windows-1250` | Eastern European |
| `Windows-1251` | Cyrillic         |
| `Windows-1253` | Greek            |
| `CP949`        | Korean           |
| `Shift_JIS`    | Japanese         |

Run `engconvert --help` or `engconvert eng-to-xml --help` to see every option.

The command prints `Conversion OK` or `*** Conversion FAILED ***`, followed
by the messages collected along the way, and exits with status 0 on success
and 1 on failure.

## Library use

```python
from engconvert.logger import Logger
from engconvert.converter import convert_eng_to_xml, convert_xml_to_eng

logger = Logger()
ok = convert_eng_to_xml("c3.eng", "c3.xml", "Windows-1252", logger)
print("\n".join(logger.messages()))
```

`detect_eng_type` and `detect_xml_type` in `engconvert.converter` return a
`FileType` (`TEXT`, `MESSAGE` or `UNKNOWN`) for a file on disk.

The lower-level readers and writers work on binary streams and the
`TextFile` and `MessageFile` data classes:

- `engconvert.text_eng`: `read_text_eng`, `write_text_eng`
- `engconvert.text_xml`: `read_text_xml`, `write_text_xml`
- `engconvert.message_eng`: `read_message_eng`, `write_message_eng`
- `engconvert.message_xml`: `read_message_xml`, `write_message_xml`

Malformed XML raises `XmlFormatError`; string offsets in a message ENG file
that point outside its data raise `EngFormatError`; an unknown encoding name
raises `UnsupportedEncodingError` (from `engconvert.encoding`). Problems are
also recorded in the `Logger` passed in.

## What it does not do

- There is no graphical interface; conversion is done from the command line
  or from Python.
- The game's own Chinese encodings, `c3-tc` (Traditional) and `c3-sc`
  (Simplified), are listed by `--encoding` but have no character tables in
  this package: a conversion using them fails with
  `Encoding not available`.