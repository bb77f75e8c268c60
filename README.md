# oapigen

Building blocks for an OpenAPI 3 code generator (configuration, operation
filtering by tag, import mapping, template overrides, command-line handling)
together with a few small example services: an in-memory pet store with a WSGI
front end, bearer-token authentication helpers and a "things" store.

## Installation

Install the project with your usual Python package installer. It needs
Python 3.10 or later and depends only on PyYAML. The `test` extra adds pytest.

## Generator configuration — `oapigen.configuration`

`Configuration` holds `package_name`, `generate` (`GenerateOptions`),
`compatibility` (`CompatibilityOptions`), `output_options` (`OutputOptions`),
`import_mapping` and `additional_imports` (a list of `AdditionalImport`).

```python
from oapigen.configuration import Configuration, ConfigurationError

config = Configuration.from_dict({
    "package": "api",
    "generate": {"chi-server": True, "models": True},
    "output-options": {"include-tags": ["pets"]},
})
config = config.update_defaults()

try:
    config.validate()
except ConfigurationError as exc:
    print("bad configuration:", exc)

print(config.to_dict())
```

- `from_dict` reads the YAML-style keys (`package`, `generate`,
  `compatibility`, `output-options`, `import-mapping`, `additional-imports`)
  and raises `ConfigurationError` for values of the wrong type.
- `to_dict` gives the same form back, leaving out empty fields (the
  `package` key is always written).
- `update_defaults` returns a copy; if no generation target is set it
  selects the echo server, models and the embedded spec.
- `validate` raises `ConfigurationError` when the package name is empty or
  when more than one of the chi, echo and gin servers is selected.

## Vendor extensions — `oapigen.extension`

`ext_string`, `ext_type_name`, `ext_parse_go_field_name`,
`ext_parse_omit_empty` and `ext_extra_tags` decode raw JSON extension values
(given as `str` or `bytes`) for `x-go-type`, `x-go-name`, `x-omitempty` and
`x-oapi-codegen-extra-tags`. Anything else, or malformed JSON, raises
`ExtensionError`.

```python
from oapigen.extension import ext_type_name, ExtensionError

ext_type_name('"uint64"')      # -> "uint64"

try:
    ext_type_name("invalid json format")
except ExtensionError:
    ...
```

## Filtering operations by tag — `oapigen.filter`

The spec is a plain mapping, as loaded from JSON or YAML.

```python
from oapigen.filter import filter_operations_by_tag

filter_operations_by_tag(spec, config)
```

Operations tagged with any configured exclude tag are removed first; then, if
include tags are given, every operation without one of them is removed.
`include_operations_with_tags`, `exclude_operations_with_tags` and
`operation_has_tag` are available on their own as well.

## Import mapping — `oapigen.imports`

`construct_import_mapping` turns a mapping of external spec references to
package paths into `GoImport` values, naming the packages `externalRef0`,
`externalRef1`, … in sorted path order; references to the same package share a
name. `go_imports` renders import statements, `merge_imports` merges mappings
(later ones win) and `iter_import_lines` yields the statements of several
mappings in turn.

## Templates — `oapigen.templates`

- `load_template_overrides(directory)` reads every file below a directory
  into a mapping keyed by relative path (`sub/name.tmpl`); an empty name gives
  an empty mapping.
- `merge_template_overrides(directory, user_templates)` layers explicit
  templates over those from the directory.
- `sanitize_code(code)` removes byte-order marks.

## Command-line configuration — `oapigen.cli`

`parse_flags(argv)` parses options such as `-o`, `-config`, `-package`,
`-old-config-style`, `-output-config` and the older `-generate`,
`-include-tags`, `-exclude-tags`, `-templates`, `-import-mapping`,
`-exclude-schemas`, `-response-type-suffix` and `-alias-types` into `Flags`,
raising `FlagError` on a bad command line. `load_configuration(flags)` reads the
YAML config file (current layout as `AppConfiguration`, or the older layout as
`OldConfiguration` with `-old-config-style`), applies the flags, fills in
defaults and validates. Older-style flags used without `-old-config-style`
raise `FlagError`.

## Example services

### Pet store — `oapigen.petstore`

```python
from oapigen.petstore import PetStore, NewPet

store = PetStore()
pet = store.add_pet(NewPet(name="Spot", tag="TagOfSpot"))   # ids start at 1000
store.find_pet_by_id(pet.id)
store.find_pets(tags=["TagOfSpot"], limit=None)
store.delete_pet(pet.id)
```

Looking up or deleting an unknown pet raises `ApiError` with code 404.

### Pet store over HTTP — `oapigen.petstore_app`

`PetStoreApp` is a WSGI application serving `GET /pets` (with `tags` and
`limit` query parameters), `POST /pets`, `GET /pets/{id}` and
`DELETE /pets/{id}`. Requests that do not fit the API (unknown route,
non-integer id, a body without a string `name`) get a 400 response. To serve it:

```
oapigen-petstore --port 8080
```

### Authentication — `oapigen.auth`

```python
from oapigen.auth import get_jws_from_header, check_token_claims

get_jws_from_header("Bearer token")   # -> "token"
check_token_claims(["things:w"], {"perms": ["things:w"]})
```

`authenticate(validator, scheme_name, authorization, scopes)` checks the
scheme is `BearerAuth`, extracts the token, passes it to your `validator`
(which returns the token's claims) and checks the `perms` claim covers the
scopes. A missing header raises `NoAuthHeaderError`, a header without the
`Bearer ` prefix `InvalidAuthHeaderError`, missing scopes
`ClaimsInvalidError`; all derive from `AuthError`.

### Things — `oapigen.things`

`ThingStore.add_thing(Thing(name=...))` stores a thing under ids counting from
0 and returns a `ThingWithId`; `list_things()` returns them ordered by id.

## What this package does not do

It does not generate code. There is no code generation entry point, no
built-in templates and no OpenAPI document loader; `oapigen.cli` builds and
validates the configuration but installs no generator command. The
authentication helpers do not sign or verify tokens themselves, and the
things store is not served over HTTP.

## Running the tests

The tests use pytest and live in `tests/`.