"""Canned replies, media placeholders and random pools."""

START_TEXT = (
    "හලෝ! මම DANUU-MD Bot.\n"
    "මම මගේ නිර්මාතෘ විසින් විශේෂයෙන් නිර්මාණය කරන ලද්දේ ඔබ වෙනුවෙන් සේවය කිරීමටයි. "
    "මගේ සියලු විධාන ලැයිස්තුව බැලීමට .help ටයිප් කරන්න."
)

PONG_TEXT = "Pong!"

HELP_TEXT = """*DANUU-MD Bot Commands:*
* .start: Bot එක පටන් ගන්න.
* .ping: Bot එක online ද කියලා බලන්න.
* .Alive: Bot එක online ද කියලා image එකක් එක්ක බලන්න.
* .help: මේ commands ලැයිස්තුව බලන්න.
* .Menu: මේ commands ලැයිස්තුව බලන්න.
* .info: Bot එක ගැන විස්තර දැනගන්න.
* .image: Image එකක් යවන්න.
* .sticker: Image එකකට reply කරලා sticker එකක් හදන්න.
* .quote: Random quote එකක් ගන්න.
* .echo <text>: ඔයා කියන එක නැවත කියනවා.
* .time: වර්තමාන වේලාව කියනවා.
* .joke: විහිළුවක් කියනවා.
* .song <song name>: සින්දුවක් download කරගන්න.
* .getdp: DP එකක් ගන්න.
* .statusview <on|off>: Statuses ස්වයංක්‍රීයව view කිරීම සක්‍රිය/අක්‍රිය කරන්න.
* .antidelete <on|off>: Deleted messages නැවත යවන්න සක්‍රිය/අක්‍රිය කරන්න.
* .viewonce: "View Once" photo/video එකක් නැවත බලන්න."""

INFO_TEXT = (
    "Hello, I'm the DANUU-MD bot. I was created with the Baileys library "
    "to automate tasks on WhatsApp."
)

ALIVE_IMAGE_URL = "https://placehold.co/500x300/32CD32/FFFFFF?text=ONLINE"
ALIVE_CAPTION = "මම දැන් Online ඉන්නවා."

IMAGE_URL = "https://placehold.co/600x400?text=Hello+from+your+bot"
IMAGE_CAPTION = "හලෝ! මේ ඔයා ඉල්ලපු image එක."

# Greetings (no prefix)
GREETINGS = {
    "hello": "*Hi! I'm DANUU-MD bot.*",
    "hi": "*Hello! How can I help you today?*",
}

# .song
SONG_AUDIO_URL = "https://www.soundhelix.com/examples/mp3/SoundHelix-Song-1.mp3"
SONG_MISSING_NAME = "කරුණාකර song එකේ නම .song command එකට පස්සේ දාන්න."
SONG_SEARCHING = "කරුණාකර ටිකක් ඉවසන්න, මම \"{name}\" සින්දුව හොයනවා."
SONG_CAPTION = "ඔයා ඉල්ලපු සින්දුව මෙන්න. (සින්දුවේ නම: {name})"
SONG_FAILED = "සින්දුව download කිරීමේදී ගැටලුවක් ඇති වුණා. කරුණාකර නැවත උත්සාහ කරන්න."

# .getdp
DP_CAPTION = "මෙන්න DP එක."
DP_MISSING = "මේ user ට DP එකක් නැහැ."
DP_FAILED = "DP එක ගන්න බෑ. කරුණාකර නැවත උත්සාහ කරන්න."

# .statusview
STATUS_VIEW_ON = "Status View feature එක දැන් **සක්‍රිය**යි."
STATUS_VIEW_OFF = "Status View feature එක දැන් **අක්‍රිය**යි."
STATUS_VIEW_USAGE = "භාවිතා කරන විදිහ: `.statusview on` හෝ `.statusview off`."

# .antidelete
ANTI_DELETE_ON = (
    "Anti-Delete feature එක දැන් **සක්‍රිය**යි. "
    "පණිවිඩයක් delete කළොත් මම ඒක නැවත යවනවා."
)
ANTI_DELETE_OFF = "Anti-Delete feature එක දැන් **අක්‍රිය**යි."
ANTI_DELETE_USAGE = "භාවිතා කරන විදිහ: `.antidelete on` හෝ `.antidelete off`."
ANTI_DELETE_WARNING = "⚠️ මෙම පණිවිඩය මකන ලදී."

# .viewonce
VIEW_ONCE_CAPTION = "මෙය \"View Once\" message එකකි. දැන් ඔබට මෙය ඕනෑම වාර ගණනක් නැරඹිය හැක."
VIEW_ONCE_PROMPT = (
    "කරුණාකර ඔබට නැවත බලන්න අවශ්‍ය \"View Once\" message එකකට reply කරලා "
    "`.viewonce` command එක භාවිතා කරන්න."
)

# .echo
ECHO_PROMPT = "ඔයාට repeat කරන්න ඕන text එක .echo command එකට පස්සේ දාන්න."

# .time
TIME_TEXT = "දැන් වෙලාව {time} යි."

QUOTES = [
    "The only way to do great work is to love what you do. - Steve Jobs",
    "Success is not final, failure is not fatal: it is the courage to continue that counts. - Winston Churchill",
    "The best way to predict the future is to create it. - Peter Drucker",
    "Do not wait for a perfect time. Take the moment and make it perfect. - Sri Chinmoy",
]

JOKES = [
    "ඇයි මකුළුවන්ට car එකක seat belt එක දාන්න බැරි? මොකද ඒ අයට කකුල් 8ක් තියෙන නිසා!",
    "මම මගේ phone එක උස්සගෙන ඉන්නේ. ඒත් දැන් ඒක phone එකක් නෙවෙයි, phone book එකක්!",
    "ගස් වලට කට ඇරලා කතා කරන්න බැරි ඇයි? මොකද ඒවට කටවල් නැහැ!",
]

# Unexpected action failures
GENERIC_FAILED = "ගැටලුවක් ඇති වුණා. කරුණාකර නැවත උත්සාහ කරන්න."
