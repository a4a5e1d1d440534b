# athenakit

Helpers for working with Amazon Athena from Python.

- **SQL text utilities** (`athenakit.sqltext`). Escape query arguments with `format_string` (for `str`) and `format_bytes` (for `bytes`, wrapped as `_binary'...'`). `escape_bytes_backslash` does the escaping alone. Classify statements with `is_read_only_statement`, `is_insert_statement` and `col_in_first_page`. Recognise query IDs with `is_qid`. Pull table names out of a query with `get_table_names_in_query`. `get_from_env_val` returns the first non-empty environment variable from a list of names. `scan_null_string` turns a value into an optional string and raises `TypeError` for anything else.
- **Result rendering** (`athenakit.render`). A `ResultSet` holds column names and rows. Turn it into CSV with `cols_to_csv`, `rows_to_csv` and `cols_rows_to_csv`. `render_table` renders it as `table`, `markdown`, `html` or, for any other value, CSV. It takes one of the style names in `OUTPUT_STYLES`; unknown names fall back to the default style. A positive `page` splits table output into pages of that many rows. The `pretty_print_*` helpers print the rendered text to stdout or to a given file and return it.
- **Workgroups** (`athenakit.workgroup`). Describe a workgroup with `Workgroup`, `WorkGroupConfig` and `WGTags`. `default_wg_config()` gives a 1 GiB per-query scan cutoff, with enforcement and CloudWatch metrics turned on. Create a workgroup through an Athena client with `Workgroup.create_remotely`. Fetch one with `get_workgroup`. Both raise `AthenaNilAPIError` when the client is `None`.

## Installation

```
pip install athenakit
```

## Examples

Escaping arguments:

```python
from athenakit.sqltext import format_string, is_qid

format_string("Athena's query's param\n")
# "'Athena''s query''s param\\n'"

is_qid("a44f8e61-4cbb-429a-b7ab-bea2c4a5caed")   # True
```

Finding the tables a query touches:

```python
from athenakit.sqltext import get_table_names_in_query

get_table_names_in_query("SELECT * FROM orders JOIN sampledb.customers ON 1=1", "default")
# {"default.orders", "sampledb.customers"}
```

The match is pessimistic. Words that follow `FROM` or `JOIN` inside string literals are reported as tables too.

Rendering results:

```python
from athenakit.render import ResultSet, cols_rows_to_csv, pretty_print_md, render_table

result = ResultSet(columns=["one", "two", "three"], rows=[["1", "2", "3"]])
cols_rows_to_csv(result)   # "one,two,three\n1,2,3\n"
render_table(result, "StyleRounded", "table", 1024)
pretty_print_md(result)
```

Creating a workgroup:

```python
from athenakit.workgroup import WGTags, Workgroup, get_workgroup

tags = WGTags()
tags.add_tag("team", "analytics")
wg = Workgroup.default("analytics_wg", None, tags)
wg.create_remotely(athena_client)          # any object with a create_work_group(**kwargs) method
get_workgroup(athena_client, "analytics_wg")  # needs get_work_group(WorkGroup=...)
```

The client is used through keyword calls shaped like the Athena API: `Name`, `Configuration` and `Tags` for creation, and `WorkGroup` for lookup. Errors raised by the client propagate unchanged.

## What this package does not do

athenakit does not connect to Athena on its own. It does not run queries, poll for their results, or page through result sets. It provides no command-line reader. You supply the Athena client object and the query results; the package escapes, inspects, renders and builds requests around them.

## Running the tests

```
pip install -e ".[test]"
pytest
```