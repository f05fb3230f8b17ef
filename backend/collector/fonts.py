"""Candidate font families checked by the installed-font probe."""

BASELINE_FAMILIES = ("monospace", "serif", "sans-serif")

# Wide characters make width differences between families easy to see
TEST_STRING = "mmmmmmmmmmlli1WQ@#"
TEST_SIZE = "72px"

CANDIDATE_FONTS = (
    # Windows core and Office
    "Arial", "Arial Black", "Arial Narrow", "Arial Rounded MT Bold",
    "Bahnschrift", "Book Antiqua", "Bookman Old Style", "Calibri", "Calibri Light",
    "Cambria", "Cambria Math", "Candara", "Century Gothic", "Comic Sans MS",
    "Consolas", "Constantia", "Corbel", "Courier New", "Ebrima", "Franklin Gothic Medium",
    "Gabriola", "Gadugi", "Georgia", "Impact", "Ink Free", "Javanese Text",
    "Leelawadee UI", "Lucida Console", "Lucida Sans Unicode", "Malgun Gothic",
    "Marlett", "Microsoft Himalaya", "Microsoft JhengHei", "Microsoft New Tai Lue",
    "Microsoft PhagsPa", "Microsoft Sans Serif", "Microsoft Tai Le", "Microsoft YaHei",
    "Microsoft Yi Baiti", "MingLiU-ExtB", "Mongolian Baiti", "MS Gothic", "MS Mincho",
    "MS PGothic", "MS Reference Sans Serif", "MV Boli", "Myanmar Text", "Nirmala UI",
    "Palatino Linotype", "Segoe MDL2 Assets", "Segoe Print", "Segoe Script", "Segoe UI",
    "Segoe UI Emoji", "Segoe UI Historic", "Segoe UI Symbol", "SimSun", "Sitka",
    "Sylfaen", "Symbol", "Tahoma", "Times New Roman", "Trebuchet MS", "Verdana",
    "Webdings", "Wingdings", "Yu Gothic",
    # East Asian and other scripts
    "SimHei", "KaiTi", "FangSong", "YouYuan", "PMingLiU", "Gulim", "Dotum", "Batang",
    "Meiryo", "Mangal", "Latha", "Gautami", "David", "FrankRuehl", "Arial Hebrew",
    "Traditional Arabic", "Arabic Typesetting", "Simplified Arabic", "Aldhabi", "Andalus",
    "Angsana New", "Cordia New", "Browallia New",
    # macOS
    "American Typewriter", "Andale Mono", "Apple Chancery", "Apple Color Emoji",
    "Apple SD Gothic Neo", "Avenir", "Avenir Next", "Baskerville", "Big Caslon",
    "Chalkboard", "Chalkduster", "Charter", "Cochin", "Copperplate", "Didot",
    "Futura", "Geneva", "Gill Sans", "Helvetica", "Helvetica Neue", "Herculanum",
    "Hoefler Text", "Lucida Grande", "Marker Felt", "Menlo", "Monaco", "Optima",
    "Palatino", "Papyrus", "PingFang SC", "Rockwell", "San Francisco", "SF Pro",
    "SF Mono", "Skia", "Snell Roundhand", "Zapfino",
    # Linux
    "Cantarell", "DejaVu Sans", "DejaVu Sans Mono", "DejaVu Serif", "Droid Sans",
    "Droid Sans Mono", "Droid Serif", "FreeMono", "FreeSans", "Liberation Mono",
    "Liberation Sans", "Liberation Serif", "Noto Color Emoji", "Noto Sans",
    "Noto Sans JP", "Noto Serif", "Ubuntu", "Ubuntu Condensed", "Ubuntu Mono",
    # Commonly installed web and developer fonts
    "Cascadia Code", "Fira Code", "Fira Mono", "Fira Sans", "Hack", "IBM Plex Mono",
    "Inconsolata", "Inter", "JetBrains Mono", "Lato", "Merriweather", "Montserrat",
    "Open Sans", "Oswald", "Playfair Display", "PT Mono", "PT Sans", "PT Serif",
    "Raleway", "Roboto", "Roboto Condensed", "Roboto Mono", "Source Code Pro",
    "Source Sans Pro", "Source Serif Pro", "Space Mono",
    # Adobe and display faces
    "Adobe Caslon Pro", "Adobe Garamond Pro", "Bauhaus 93", "Bodoni MT", "Broadway",
    "Brush Script MT", "Castellar", "Centaur", "Century Schoolbook", "Chiller",
    "Colonna MT", "Cooper Std", "Edwardian Script ITC", "Elephant", "Engravers MT",
    "Felix Titling", "Footlight MT Light", "Frutiger", "Garamond", "Gigi",
    "Goudy Old Style", "Harrington", "Jokerman", "Kozuka Gothic Pro", "Lucida Calligraphy",
    "Lucida Handwriting", "Magneto", "Minion Pro", "Mistral", "Modern No. 20",
    "Monotype Corsiva", "Myriad Pro", "Niagara Solid", "OCR A Extended",
    "Old English Text MT", "Onyx", "Perpetua", "Pristina", "Ravie", "Showcard Gothic",
    "Snap ITC", "Stencil", "Tempus Sans ITC", "Trajan Pro", "Univers", "Vivaldi",
    "Vladimir Script",
)
