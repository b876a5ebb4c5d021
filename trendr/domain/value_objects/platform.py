REDDIT = "reddit"
X = "x"
YOUTUBE = "youtube"

PLATFORMS = (REDDIT, X, YOUTUBE)

POST = "post"
VIDEO = "video"
