"""Timeline service: posts of the users someone follows."""