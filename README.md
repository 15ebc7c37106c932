# proxyprep

Helpers for preparing printable proxies of trading cards. The package reads a
pasted card list, works out which images have to be fetched and what file
names they get, and records how many copies of each card to print and which
cards have their own backside. It also covers a few small pieces of
application state: stylesheets, colour cubes, persisted settings and a plugin
registry.

It needs nothing beyond the standard library. It does no networking itself:
you pass in the function that fetches a URL.

## Recognising the input

`proxyprep.inference.infer_source(text)` returns an `InputType`:

- `InputType.MPC_AUTOFILL` when the text starts with `<order>` and ends with
  `</order>`;
- `InputType.DECKLIST` when every non-empty line is a decklist line in the
  Moxfield or Archidekt style, such as `1x Lightning Bolt (2X2) 117` or
  `4 Counterspell (DMR) 45`; lines ending in `:` (section headings) are
  allowed;
- `InputType.NONE` otherwise.

`InputType.from_name(name)` looks a type up by its display name
(`"Decklist"`, `"MPCAutofill"`, `"None"`), falling back to `InputType.NONE`.

`validate_settings(input_type, card_size_choice, enable_uncrop)` returns a
list of hint messages, empty when all is well: the card size must be
`"Standard"`, and decklists need `enable_uncrop` to be true.

`make_downloader(input_type, skip_files)` returns an `MPCFillDownloader` for
`InputType.MPC_AUTOFILL` and a `ScryfallDownloader` for anything else.

## Downloaders

Both downloaders implement `proxyprep.downloader.CardArtDownloader`:

- `parse_input(text)` reads the card list;
- `begin_download(client)` queues the first requests on a `QueuedClient` and
  returns `False` when there is nothing to do;
- `handle_reply(reply)` consumes a `Reply(url, data, error)`;
- `files()`, `amount(file_name)`, `backside(file_name)` and
  `duplicates(file_name)` describe the result;
- `provides_bleed_edge()` tells whether the images already carry a bleed
  edge.

Progress and images are reported through two optional attributes,
`on_progress(progress, target)` and `on_image_available(image_data, file_name)`.
File names listed in `skip_files` are not fetched again.

`proxyprep.downloader.run_downloads(downloader, fetch)` drives a downloader to
completion, calling `fetch(url) -> bytes` for every queued URL in order, and
returns the URLs fetched. A fetch that raises `OSError` is logged and answered
with an empty reply carrying the error text.

```python
import urllib.request

from proxyprep.downloader import run_downloads
from proxyprep.inference import InputType, infer_source, make_downloader


def fetch(url: str) -> bytes:
    with urllib.request.urlopen(url) as response:
        return response.read()


images = {}
text = "1x Lightning Bolt (2X2) 117\n"
input_type = infer_source(text)
assert input_type is InputType.DECKLIST

downloader = make_downloader(input_type, skip_files=[])
downloader.on_image_available = lambda data, name: images.__setitem__(name, data)
downloader.parse_input(text)
run_downloads(downloader, fetch)

for name in downloader.files():
    print(name, downloader.amount(name), downloader.backside(name))
```

### Decklists (`proxyprep.decklist`)

`ScryfallDownloader(skip_files=(), request_interval=0.1)` first requests the
card data of every line, then each front image, then the back images. It waits
`request_interval` seconds after each reply. Lines that do not match the
decklist pattern are ignored.

Each line becomes a `DecklistCard` through `parse_deckline(line)`, which
raises `ValueError` for a line that is not a decklist line. File names take
the form `Name (SET) NUMBER.png`, with the characters `\ / : * ? " < > |`
removed. `decklist_regex()` returns the pattern used.

Cards whose data has the layout `transform`, `modal_dfc`,
`double_faced_token` or `reversible_card` are double-faced
(`has_backside(card_info)`); their back image is stored as
`__back_<front file name>` (`backside_filename(file_name)`). The shared card
back `__back.png` is fetched too unless it is in `skip_files`. These images
come without a bleed edge, and `duplicates()` is always empty.

### MPC Autofill orders (`proxyprep.mpcfill`)

`MPCFillDownloader(skip_files=(), download_script=DOWNLOAD_SCRIPT)` reads an
`<order>` document with `<fronts>`, optional `<backs>` and a `<cardback>`.
`parse_input` raises `ValueError` when the XML does not parse or when the
order, the fronts or the cardback is missing.

Every card element names its `<name>`, `<id>` and comma-separated `<slots>`
(`parse_mpcfill_card(element)` returns an `MPCFillCard` and its slots). A back
placed in the same slot becomes that card's `MPCFillBackside`. Slots holding
the same front with the same back are counted together in `amount()`. Fronts
that share a name but not a back get ` - Copy N` inserted before the
extension; `duplicates(name)` returns these extra names.

`begin_download` queues one request per distinct image id as
`<download_script>?id=<id>`, plus the cardback as `__back.png`.
`id_from_url(url)` takes the id back out of such a URL, and replies are
decoded from base64 before they are handed on. These images carry a bleed
edge.

## Styles (`proxyprep.styles`)

- `list_styles(style_dirs)` returns the built-in styles `Default` and
  `Fusion` followed by the base names of the `.qss` files in `style_dirs`,
  each listed once.
- `load_stylesheet(style, style_dirs)` returns `""` for a built-in style, the
  text of the first `<style>.qss` found otherwise, and `None` when there is
  none.

## Colour cubes (`proxyprep.cubes`)

- `list_cube_names(cube_dirs)` returns `"None"` followed by the base names of
  the `.cube` files found.
- `find_cube_path(cube_name, cube_dirs)` returns the first matching file and
  raises `FileNotFoundError` when there is none.
- `preload_cube(settings, cube_name, loader, cube_dirs)` calls
  `loader(path)` and caches the result in an `AppSettings`, unless the name
  is `"None"` or the cube is cached already; `get_cube_image(...)` does the
  same and returns the cached cube.

## Settings (`proxyprep.settings`)

`AppSettings` holds the project path (default `proj.json` in the current
directory), the theme (default `Default`), window geometry and state as
bytes, and which option panels are visible (`object_visibility(name)`, shown
unless set otherwise). It also keeps a thread-safe cache of colour cubes
(`set_cube`, `get_cube`); a cube already cached is not replaced.

`save(path, version)` writes the settings as JSON; `load(path)` reads them
back and does nothing when the file is missing or has no version. If the saved
settings hold no visibility group, the `Guides Options` and `Global Config`
panels default to hidden.

`ensure_user_folders(root=".")` creates `res/cubes`, `res/styles` and
`res/base_pdfs` below `root` and returns their paths.

## Plugins (`proxyprep.plugins`)

A `PluginInterface` emits three requests, `pause_cropper()`,
`unpause_cropper()` and `refresh_card_grid()`. Callbacks are attached with
`connect(event, callback)`, where `event` is a `PluginEvent` or its value
string, and `route(other)` re-emits everything `other` emits.

`PluginRegistry(plugins)` holds `Plugin(name, init, destroy)` entries:
`names()` lists them, `init_plugin(name, project)` creates a plugin (or
returns `None` for an unknown name) and `destroy_plugin(name, plugin)` hands
the plugin to the matching destructors.

## What the package does not do

There is no graphical interface, no command-line program and no PDF or SVG
rendering. It does not crop, colour-correct or otherwise process images, does
not store projects, and ships no plugins of its own: the registry is empty
until you fill it. It fetches nothing by itself; downloads happen only through
the `fetch` function you supply.