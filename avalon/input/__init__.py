"""Device state, input events, action mapping, layered contexts and the input engine."""