"""Post service: storing posts and listing them by author."""